"""
spheretrace - A Python Path Tracer for Sphere Scenes

Renders spheres lit by a sky gradient using recursive Monte Carlo
path tracing:
- Diffuse, metallic and dielectric (glass) materials
- Thin-lens camera with depth of field
- Jittered anti-aliasing and gamma correction
- Tile-parallel rendering with reproducible per-tile random streams
"""

__version__ = "0.1.0"
__author__ = "spheretrace Team"

from .vec3 import Vec3, Point3, Color, mix
from .ray import Ray
from .shapes import Sphere, World, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metallic, Metal, Dielectric, NaiveDielectric
from .camera import Camera
from .integrator import PathIntegrator, sky_color
from .renderer import Renderer, RenderSettings
from .scenes import SCENES
