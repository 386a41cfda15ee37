import logging

from springlayout.config import (
    LayoutOptions,
    default_worker_count,
    get_default_options,
    set_default_options,
)
from springlayout.geometry import Coordinates
from springlayout.logging_utils import _safe_repr, debug_log_call


def test_default_option_values():
    options = get_default_options()
    assert options.spring_scale == 1.0 / 200.0
    assert options.coulomb_scale == 1.0
    assert options.time_delta == 0.1
    assert options.steps == 20000
    assert options.workers is None


def test_default_options_are_copied():
    original = get_default_options()
    try:
        changed = LayoutOptions(steps=10, seed=4)
        set_default_options(changed)
        changed.steps = 99
        assert get_default_options().steps == 10

        fetched = get_default_options()
        fetched.seed = 123
        assert get_default_options().seed == 4
    finally:
        set_default_options(original)


def test_default_worker_count_is_positive(monkeypatch):
    monkeypatch.setattr("os.cpu_count", lambda: 8)
    assert default_worker_count() == 7
    monkeypatch.setattr("os.cpu_count", lambda: 1)
    assert default_worker_count() == 1
    monkeypatch.setattr("os.cpu_count", lambda: None)
    assert default_worker_count() == 1


def test_safe_repr_summarises_values():
    assert _safe_repr(Coordinates(1.0, 2.5)) == "Coordinates(1, 2.5)"
    assert _safe_repr(list(range(20))).startswith("list[20](0, 1, 2, 3, 4, ...)")


def test_debug_log_call_logs_entry_and_exit(caplog):
    logger = logging.getLogger("springlayout.tests")

    @debug_log_call(logger, name="double")
    def double(value):
        return value * 2

    with caplog.at_level(logging.DEBUG, logger="springlayout.tests"):
        assert double(4) == 8

    messages = [record.getMessage() for record in caplog.records]
    assert "Entering double (args=[4])" in messages
    assert "Exiting double -> 8" in messages
