"""Two-dimensional vectors, shapes and circle/box contact queries."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """A 2D vector or position; y grows downwards."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        return self if length <= 0.0 else self / length


@dataclass(frozen=True)
class AaBB:
    """Axis-aligned bounding box."""

    min: Vec2
    max: Vec2

    def center(self) -> Vec2:
        return Vec2((self.min.x + self.max.x) / 2.0, (self.min.y + self.max.y) / 2.0)

    def translate(self, value: Vec2) -> AaBB:
        return AaBB(self.min + value, self.max + value)


@dataclass(frozen=True)
class Circle:
    center: Vec2
    radius: float


@dataclass(frozen=True)
class ContactSurface:
    """A surface reached after moving ``way``; ``approximation`` is the distance left."""

    way: float
    approximation: float
    surface_normal: Vec2


@dataclass(frozen=True)
class Contact:
    """Closest points and normals of two shapes; ``dist`` < 0 means penetration."""

    point1: Vec2
    point2: Vec2
    normal1: Vec2
    normal2: Vec2
    dist: float


def reflected_vector(v: Vec2, surface_normal: Vec2) -> Vec2:
    """r = v - 2 (v . n) n"""
    return v - surface_normal * (2.0 * v.dot(surface_normal))


def vector_angle(v1: Vec2, v2: Vec2) -> float:
    """Angle between two vectors in radians."""
    cos = v1.normalized().dot(v2.normalized())
    return math.acos(max(-1.0, min(1.0, cos)))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def contact_circle_aabb(circle: Circle, aabb: AaBB, prediction: float) -> Contact | None:
    """Contact between a circle (shape 1) and a box (shape 2).

    Returns ``None`` when the shapes are further apart than ``prediction``.
    """
    center = aabb.center()
    half_x = (aabb.max.x - aabb.min.x) / 2.0
    half_y = (aabb.max.y - aabb.min.y) / 2.0
    local_x = circle.center.x - center.x
    local_y = circle.center.y - center.y
    proj_x = _clamp(local_x, -half_x, half_x)
    proj_y = _clamp(local_y, -half_y, half_y)

    if (proj_x, proj_y) != (local_x, local_y):
        offset = Vec2(local_x - proj_x, local_y - proj_y)
        distance = offset.length()
        normal2 = offset / distance
        dist = distance - circle.radius
        point2 = center + Vec2(proj_x, proj_y)
    else:
        faces = (
            (half_x - local_x, Vec2(1.0, 0.0)),
            (local_x + half_x, Vec2(-1.0, 0.0)),
            (half_y - local_y, Vec2(0.0, 1.0)),
            (local_y + half_y, Vec2(0.0, -1.0)),
        )
        depth, normal2 = min(faces, key=lambda face: face[0])
        dist = -depth - circle.radius
        point2 = circle.center + normal2 * depth

    if dist > prediction:
        return None
    normal1 = -normal2
    return Contact(
        point1=circle.center + normal1 * circle.radius,
        point2=point2,
        normal1=normal1,
        normal2=normal2,
        dist=dist,
    )