"""
Built-in scenes.

Each scene comes as a world builder plus a matching camera builder that
takes the image aspect ratio.
"""

from __future__ import annotations

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, World
from .materials import Lambertian, Metallic, Dielectric


def three_spheres_scene(sphere_z: float = -1.5) -> World:
    """Diffuse, glass and metal spheres side by side on a large ground sphere."""
    world = World()

    world.add(Sphere(Point3(0.0, 0.0, sphere_z), 0.5, Lambertian(Color(0.1, 0.2, 0.5))))
    world.add(Sphere(Point3(-1.0, 0.0, sphere_z), 0.5, Dielectric(1.5)))
    world.add(Sphere(Point3(1.0, 0.0, sphere_z), 0.5, Metallic(Color(0.8, 0.6, 0.2), 0.0)))

    # Ground
    world.add(Sphere(Point3(0.0, -100.5, sphere_z), 100.0, Lambertian(Color(0.8, 0.8, 0.0))))

    return world


def three_spheres_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vec3(0, 1, 0),
        vfov=90.0,
        aspect_ratio=aspect_ratio
    )


def three_spheres_dof_camera(aspect_ratio: float) -> Camera:
    """Raised camera focused on the middle sphere, with a wide aperture."""
    look_from = Point3(-2, 2, 1)
    look_at = Point3(0, 0, -1.5)
    return Camera(
        look_from=look_from,
        look_at=look_at,
        vup=Vec3(0, 1, 0),
        vfov=30.0,
        aspect_ratio=aspect_ratio,
        aperture=0.5,
        focus_dist=(look_from - look_at).length()
    )


def single_sphere_scene() -> World:
    """One diffuse sphere straight ahead of the camera."""
    return World([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))])


def single_sphere_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        vup=Vec3(0, 1, 0),
        vfov=90.0,
        aspect_ratio=aspect_ratio
    )


SCENES = {
    'demo': (three_spheres_scene, three_spheres_camera),
    'focus': (three_spheres_scene, three_spheres_dof_camera),
    'single': (single_sphere_scene, single_sphere_camera),
}
