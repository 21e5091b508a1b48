"""
Geometric shapes for the ray tracer.

Each shape implements the Hittable protocol with a `hit` method. The World
container is itself Hittable and reports the closest hit among its members.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material


# Squared direction lengths below this are treated as a zero-length ray
DEGENERATE_DIRECTION = 1e-12


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        t: The ray parameter at intersection
        point: The intersection point in world space
        normal: The outward geometric normal. It is not flipped toward the
            ray; materials decide which side they were struck from.
        material: The material at the hit point (borrowed from the shape)
    """
    t: float
    point: Point3
    normal: Vec3
    material: Optional[Material] = None

    def front_face(self, ray: Ray) -> bool:
        """True if the ray arrived from the side the normal points to."""
        return ray.direction.dot(self.normal) < 0


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            t_min: Lower bound on t, exclusive (avoids self-intersection)
            t_max: Upper bound on t, exclusive

        Returns:
            HitRecord if intersection found, None otherwise
        """
        pass


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (negative radius flips the normals)
            material: Material for shading, may be shared with other spheres
        """
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        With P(t) = O + tD and oc = O - C, |P(t) - C|² = r² expands to
        a·t² + 2b·t + c = 0 with a = D·D, b = oc·D, c = oc·oc - r².
        A tangent ray (zero discriminant) counts as a miss.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a < DEGENERATE_DIRECTION:
            return None
        b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = b * b - a * c
        if discriminant <= 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Nearest root first, then the far one
        for root in ((-b - sqrtd) / a, (-b + sqrtd) / a):
            if t_min < root < t_max:
                point = ray.at(root)
                return HitRecord(
                    t=root,
                    point=point,
                    normal=(point - self.center) / self.radius,
                    material=self.material
                )
        return None

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class World(Hittable):
    """An ordered collection of hittables searched by linear scan."""

    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the world."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Return the closest hit among all objects, if any.

        The upper bound shrinks to each improving hit, so a farther object
        can never replace a nearer one.
        """
        closest = t_max
        found = None

        for obj in self.objects:
            hit_record = obj.hit(ray, t_min, closest)
            if hit_record is not None:
                closest = hit_record.t
                found = hit_record

        return found

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"World({len(self.objects)} objects)"
