"""
Materials and the scattering protocol.

Implements:
- Lambertian diffuse
- Metallic (specular reflection with roughness)
- Dielectric (glass, water - Fresnel-weighted reflection/refraction)
- NaiveDielectric (refraction without Fresnel weighting)

A material turns an incoming ray and a hit into a scattered ray plus an
attenuation color, or returns None when the ray is absorbed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import math

import numpy as np

from .vec3 import Vec3, Color, random_in_unit_sphere, random_unit_vector
from .ray import Ray
from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: The intersection that produced this scatter
            rng: Random source owned by the calling task

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


def schlick(cosine: float, refractive_index: float) -> float:
    """Schlick's approximation for Fresnel reflectance."""
    r0 = (1 - refractive_index) / (1 + refractive_index)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        scatter_direction = hit.normal + random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return ScatterResult(
            scattered_ray=Ray(hit.point, scatter_direction),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metallic(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, roughness: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            roughness: Surface roughness (0 = mirror, 1 = very rough)
        """
        self.albedo = albedo
        self.roughness = max(0.0, min(roughness, 1.0))

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)

        if self.roughness > 0:
            reflected = reflected + random_in_unit_sphere(rng) * self.roughness

        # Rays perturbed below the surface are absorbed
        if reflected.dot(hit.normal) > 0:
            return ScatterResult(
                scattered_ray=Ray(hit.point, reflected),
                attenuation=self.albedo
            )
        return None

    def __repr__(self) -> str:
        return f"Metallic(albedo={self.albedo}, roughness={self.roughness})"


Metal = Metallic


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, refractive_index: float = 1.5):
        """Create a dielectric material.

        Args:
            refractive_index: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        self.refractive_index = refractive_index

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        attenuation = Color(1.0, 1.0, 1.0)
        direction = ray_in.direction
        d_dot_n = direction.dot(hit.normal)
        length = direction.length()

        if d_dot_n > 0:
            # Leaving the medium
            outward_normal = -hit.normal
            ni_over_nt = self.refractive_index
        else:
            outward_normal = hit.normal
            ni_over_nt = 1.0 / self.refractive_index

        refracted = direction.refract(outward_normal, ni_over_nt)
        if refracted is not None:
            if d_dot_n > 0:
                c = d_dot_n / length
                cosine = math.sqrt(max(0.0, 1.0 - self.refractive_index ** 2 * (1.0 - c * c)))
            else:
                cosine = -d_dot_n / length

            if rng.random() > schlick(cosine, self.refractive_index):
                return ScatterResult(Ray(hit.point, refracted), attenuation)

        reflected = direction.normalize().reflect(hit.normal)
        return ScatterResult(Ray(hit.point, reflected), attenuation)

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index})"


class NaiveDielectric(Dielectric):
    """Dielectric that always refracts when Snell's law allows it."""

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        attenuation = Color(1.0, 1.0, 1.0)
        direction = ray_in.direction

        if direction.dot(hit.normal) > 0:
            outward_normal = -hit.normal
            ni_over_nt = self.refractive_index
        else:
            outward_normal = hit.normal
            ni_over_nt = 1.0 / self.refractive_index

        refracted = direction.refract(outward_normal, ni_over_nt)
        if refracted is None:
            refracted = direction.normalize().reflect(hit.normal)
        return ScatterResult(Ray(hit.point, refracted), attenuation)

    def __repr__(self) -> str:
        return f"NaiveDielectric(refractive_index={self.refractive_index})"
