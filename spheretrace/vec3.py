"""
Vector3 class for 3D math operations.

Used interchangeably for:
- Points in 3D space
- Direction vectors
- RGB color values

Vectors are values: every operation returns a new Vec3 and nothing mutates
an existing one.
"""

from __future__ import annotations
import math
from typing import Iterator, Optional, Union
import numpy as np


class Vec3:
    """An immutable 3D vector backed by a float64 numpy array."""

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)
        self._data.setflags(write=False)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from a copy of a numpy array."""
        v = cls.__new__(cls)
        v._data = np.array(arr, dtype=np.float64)
        v._data.setflags(write=False)
        return v

    @classmethod
    def fill(cls, value: float) -> Vec3:
        """Create a vector with all three components set to value."""
        return cls(value, value, value)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    # Equality is approximate, so vectors are unhashable
    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data + other._data)
        return Vec3.from_array(self._data + other)

    def __radd__(self, other: float) -> Vec3:
        return Vec3.from_array(other + self._data)

    def __sub__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data - other._data)
        return Vec3.from_array(self._data - other)

    def __rsub__(self, other: float) -> Vec3:
        return Vec3.from_array(other - self._data)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data * other._data)
        return Vec3.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3.from_array(other * self._data)

    def __truediv__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data / other._data)
        return Vec3.from_array(self._data / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return float(np.linalg.norm(self._data))

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        A zero-length vector normalizes to the zero vector.
        """
        length = self.length()
        if length == 0:
            return Vec3(0, 0, 0)
        return Vec3.from_array(self._data / length)

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return Vec3.from_array(np.cross(self._data, other._data))

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)

    def refract(self, normal: Vec3, ni_over_nt: float) -> Optional[Vec3]:
        """Refract this vector through a surface using Snell's law.

        Args:
            normal: Unit surface normal on the incident side
            ni_over_nt: Ratio of refractive indices (incident / transmitted)

        Returns:
            Refracted direction, or None on total internal reflection
        """
        unit_direction = self.normalize()
        dt = unit_direction.dot(normal)
        discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
        if discriminant <= 0:
            return None
        return (unit_direction - normal * dt) * ni_over_nt - normal * math.sqrt(discriminant)

    def near_zero(self, epsilon: float = 1e-8) -> bool:
        """Check if vector is close to zero in all dimensions."""
        return bool(np.all(np.abs(self._data) < epsilon))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


def mix(a, b, t: float):
    """Linear interpolation between two like values (floats or vectors)."""
    return a + (b - a) * t


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point strictly inside the unit sphere."""
    while True:
        p = Vec3.from_array(rng.uniform(-1.0, 1.0, 3))
        if p.length_squared() < 1:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector (uniform on the sphere surface)."""
    while True:
        p = rng.standard_normal(3)
        norm = np.linalg.norm(p)
        if norm > 1e-12:
            return Vec3.from_array(p / norm)


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk (z=0)."""
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        p = Vec3(x, y, 0)
        if p.length_squared() < 1:
            return p


# Convenience type aliases
Point3 = Vec3
Color = Vec3
