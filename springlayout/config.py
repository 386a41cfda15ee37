"""Layout configuration defaults."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from typing import Optional

SPRING_SCALE = 1.0 / 200.0
COULOMB_SCALE = 1.0
TIME_DELTA = 0.1


@dataclass
class LayoutOptions:
    """Tuning knobs for a single layout run."""

    spring_scale: float = SPRING_SCALE
    coulomb_scale: float = COULOMB_SCALE
    time_delta: float = TIME_DELTA
    steps: int = 20000
    width: float = 1000.0
    height: float = 1000.0
    workers: Optional[int] = None
    seed: int = 0
    labels: bool = False


_DEFAULT_OPTIONS = LayoutOptions()


def get_default_options() -> LayoutOptions:
    return copy.deepcopy(_DEFAULT_OPTIONS)


def set_default_options(options: LayoutOptions) -> None:
    global _DEFAULT_OPTIONS
    _DEFAULT_OPTIONS = copy.deepcopy(options)


def default_worker_count() -> int:
    """Hardware parallelism minus one core, never below one worker."""

    return max((os.cpu_count() or 1) - 1, 1)


__all__ = [
    "COULOMB_SCALE",
    "LayoutOptions",
    "SPRING_SCALE",
    "TIME_DELTA",
    "default_worker_count",
    "get_default_options",
    "set_default_options",
]
