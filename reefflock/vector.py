"""Immutable three-component vectors and rotation helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

_NAN = float("nan")


@dataclass(frozen=True, slots=True)
class Vec3:
    """A point or direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; all NaN for a zero vector."""
        size = self.length()
        if size == 0:
            return Vec3(_NAN, _NAN, _NAN)
        return self / size

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def distance(self, other: Vec3) -> float:
        return (self - other).length()


def rotate_about_axis(vec: Vec3, angle: float, axis: Vec3) -> Vec3:
    """Rotate ``vec`` counter-clockwise by ``angle`` radians about ``axis``."""
    k = axis.normalized()
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return vec * cos_a + k.cross(vec) * sin_a + k * (k.dot(vec) * (1.0 - cos_a))