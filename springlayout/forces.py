"""Spring-electrical force laws.

Two force families act on every node:

* repulsion ("coulomb") between every pair of distinct nodes, inverse-square
  in their distance and scaled by the product of their weights;
* attraction ("hook") along every incident relation, growing with the
  relation's stiffness and with the current stretch.

The functions here work on positions and plain scalars only; ``model`` feeds
them snapshots of node positions.

Coincident points have no direction. Both families return ``Vector2D.ZERO``
for them, and a nonzero squared distance below ``MIN_DISTANCE_SQUARED`` is
clamped for the repulsion magnitude.
"""

from __future__ import annotations

import math

from .geometry import Coordinates, Vector2D

MIN_DISTANCE_SQUARED = 1e-12


def distance_squared(a: Coordinates, b: Coordinates) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def coulomb_force(weight_a: float, weight_b: float, dist_sq: float, scale: float) -> float:
    return scale * (weight_a * weight_b) / max(dist_sq, MIN_DISTANCE_SQUARED)


def coulomb_vector(
    position: Coordinates,
    other_position: Coordinates,
    weight: float,
    other_weight: float,
    scale: float,
) -> Vector2D:
    """Repulsion felt at ``position``, pointing away from ``other_position``."""

    dist_sq = distance_squared(position, other_position)
    if dist_sq == 0.0:
        return Vector2D.ZERO
    force = coulomb_force(weight, other_weight, dist_sq, scale)
    direction = -position.to(other_position).normalize()
    return direction * force


def hook_force(weight_squared: float, dist_sq: float, scale: float) -> float:
    return math.sqrt(weight_squared * dist_sq * scale)


def hook_vector(
    source: Coordinates,
    target: Coordinates,
    weight_squared: float,
    scale: float,
) -> Vector2D:
    """Spring pull on ``source``, pointing towards ``target``."""

    dist_sq = distance_squared(source, target)
    if dist_sq == 0.0:
        return Vector2D.ZERO
    force = hook_force(weight_squared, dist_sq, scale)
    return source.to(target).normalize() * force


__all__ = [
    "MIN_DISTANCE_SQUARED",
    "coulomb_force",
    "coulomb_vector",
    "distance_squared",
    "hook_force",
    "hook_vector",
]
