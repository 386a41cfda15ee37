"""2-D value types used by the force model."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterable


def _divide(value: float, divisor: float) -> float:
    # IEEE division: x/0 -> +-inf, 0/0 -> nan
    if divisor == 0.0:
        if value == 0.0 or math.isnan(value):
            return math.nan
        return math.copysign(math.inf, value) * math.copysign(1.0, divisor)
    return value / divisor


@dataclass(frozen=True)
class Vector2D:
    """Displacement or force with no identity of its own."""

    x: float
    y: float

    ZERO: ClassVar["Vector2D"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __add__(self, other: "Vector2D") -> "Vector2D":
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector2D":
        return Vector2D(_divide(self.x, scalar), _divide(self.y, scalar))

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2D":
        """Return the unit vector; a zero vector yields ``(nan, nan)``."""

        return self / self.length()

    def travel(self, t: float) -> "Vector2D":
        """Offset covered in ``t`` when the vector is read as an acceleration."""

        return self * 0.5 * (t * t)

    @staticmethod
    def sum(vectors: Iterable["Vector2D"]) -> "Vector2D":
        x = 0.0
        y = 0.0
        for vector in vectors:
            x += vector.x
            y += vector.y
        return Vector2D(x, y)


Vector2D.ZERO = Vector2D(0.0, 0.0)


@dataclass(frozen=True)
class Coordinates:
    """Absolute position in the layout plane."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def to(self, other: "Coordinates") -> Vector2D:
        return Vector2D(other.x - self.x, other.y - self.y)

    def __add__(self, offset: Vector2D) -> "Coordinates":
        if not isinstance(offset, Vector2D):
            return NotImplemented
        return Coordinates(self.x + offset.x, self.y + offset.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


__all__ = ["Coordinates", "Vector2D"]
