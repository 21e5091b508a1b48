"""
Recursive Monte Carlo path integrator.

Each call traces one path: intersect the world, ask the struck material for
a scattered ray, and recurse until the path escapes to the sky, is absorbed,
or runs out of bounces.
"""

from __future__ import annotations

import numpy as np

from .vec3 import Color, mix
from .ray import Ray
from .shapes import Hittable

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient used as the background."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return mix(WHITE, SKY_BLUE, t)


class PathIntegrator:
    """Computes the radiance carried along a ray."""

    def __init__(self, max_depth: int = 50, t_min: float = 0.001):
        """Create an integrator.

        Args:
            max_depth: Number of scatter events allowed along one path
            t_min: Lower intersection bound, keeps scattered rays from
                re-hitting the surface they left (shadow acne)
        """
        self.max_depth = max_depth
        self.t_min = t_min

    def ray_color(self, ray: Ray, world: Hittable, rng: np.random.Generator, depth: int = 0) -> Color:
        """Compute the color for a ray using path tracing.

        Args:
            ray: The ray to trace
            world: The scene to trace against
            rng: Random source owned by the calling task
            depth: Number of bounces already taken

        Returns:
            Linear radiance along the ray. Paths that exhaust the bounce
            budget return the background as if they had escaped.
        """
        hit_record = world.hit(ray, self.t_min, float('inf'))

        if hit_record is not None and depth < self.max_depth:
            if hit_record.material is None:
                # Unshaded geometry renders its normal
                return (hit_record.normal + WHITE) * 0.5
            scatter_result = hit_record.material.scatter(ray, hit_record, rng)
            if scatter_result is None:
                return BLACK
            return scatter_result.attenuation * self.ray_color(
                scatter_result.scattered_ray, world, rng, depth + 1
            )

        return sky_color(ray)

    def __repr__(self) -> str:
        return f"PathIntegrator(max_depth={self.max_depth}, t_min={self.t_min})"
