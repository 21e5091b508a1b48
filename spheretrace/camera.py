"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (thin lens)
- Configurable field of view
- Arbitrary positioning via look-at
"""

from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .vec3 import Vec3, Point3, random_in_unit_disk
from .ray import Ray


class Camera:
    """A thin-lens perspective camera. Read-only once constructed."""

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
            aperture: Lens diameter for depth of field (0 = pinhole)
            focus_dist: Distance to the plane in perfect focus
        """
        theta = math.radians(vfov)
        half_height = math.tan(theta / 2)
        half_width = aspect_ratio * half_height

        # Compute orthonormal camera basis
        self.w = (look_from - look_at).normalize()  # Points backward from camera
        self.u = vup.cross(self.w).normalize()       # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.horizontal = self.u * (2.0 * half_width * focus_dist)
        self.vertical = self.v * (2.0 * half_height * focus_dist)
        self.lower_left_corner = (
            self.origin
            - self.u * (half_width * focus_dist)
            - self.v * (half_height * focus_dist)
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)
            rng: Random source for lens sampling. Required when the
                aperture is open and ignored for a pinhole.

        Raises:
            ValueError: If the lens is open and no rng is given

        Returns:
            A ray from a point on the lens through the image-plane target.
            The direction is left unnormalized.
        """
        if self.lens_radius > 0:
            if rng is None:
                raise ValueError("rng is required when aperture > 0")
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        origin = self.origin + offset
        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        return Ray(origin, target - origin)

    make_ray = get_ray

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"
