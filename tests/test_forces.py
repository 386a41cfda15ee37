import math

import numpy as np
import pytest

from springlayout.forces import (
    MIN_DISTANCE_SQUARED,
    coulomb_force,
    coulomb_vector,
    distance_squared,
    hook_force,
    hook_vector,
)
from springlayout.geometry import Coordinates, Vector2D


def test_distance_squared_matches_offsets():
    rng = np.random.default_rng(42)
    for _ in range(200):
        ax, ay, bx, by = rng.uniform(-1e3, 1e3, size=4)
        expected = (bx - ax) ** 2 + (by - ay) ** 2
        got = distance_squared(Coordinates(ax, ay), Coordinates(bx, by))
        assert got == pytest.approx(expected, rel=1e-10, abs=1e-10)


def test_distance_squared_coincident_is_zero():
    point = Coordinates(3.5, -1.25)
    assert distance_squared(point, point) == 0.0


def test_hook_force_and_vector():
    assert hook_force(1.0, 8.0, 1.0) == math.sqrt(8.0)

    vector = hook_vector(Coordinates(0.0, 0.0), Coordinates(2.0, 2.0), 1.0, 1.0)
    assert vector.x == pytest.approx(2.0)
    assert vector.y == pytest.approx(2.0)
    assert vector.length() == pytest.approx(math.sqrt(8.0))


def test_hook_force_scales_with_stiffness():
    # weight 3 -> weight_squared 9, distance 2
    assert hook_force(9.0, 4.0, 0.25) == pytest.approx(3.0)


def test_coulomb_vector_points_away():
    vector = coulomb_vector(Coordinates(0.0, 0.0), Coordinates(2.0, 0.0), 1.0, 2.0, 1.0)
    assert vector.x == pytest.approx(-0.5)
    assert vector.y == pytest.approx(0.0)


def test_coulomb_vector_antisymmetric():
    a = Coordinates(1.0, 2.0)
    b = Coordinates(-3.0, 7.5)
    forward = coulomb_vector(a, b, 1.5, 1.5, 0.7)
    backward = coulomb_vector(b, a, 1.5, 1.5, 0.7)
    assert forward.x == pytest.approx(-backward.x)
    assert forward.y == pytest.approx(-backward.y)


def test_coincident_points_have_no_force():
    point = Coordinates(1.0, 1.0)
    assert coulomb_vector(point, point, 1.0, 1.0, 1.0) == Vector2D.ZERO
    assert hook_vector(point, point, 1.0, 1.0) == Vector2D.ZERO


def test_tiny_distance_is_clamped_for_repulsion():
    assert coulomb_force(1.0, 1.0, MIN_DISTANCE_SQUARED / 100.0, 1.0) == pytest.approx(
        1.0 / MIN_DISTANCE_SQUARED
    )
    vector = coulomb_vector(Coordinates(0.0, 0.0), Coordinates(1e-9, 0.0), 1.0, 1.0, 1.0)
    assert math.isfinite(vector.x) and math.isfinite(vector.y)
    assert vector.x < 0.0
