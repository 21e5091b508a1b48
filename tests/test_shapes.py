"""Tests for geometric shapes and the world container."""

import pytest
import math
from spheretrace.vec3 import Vec3, Point3, Color
from spheretrace.ray import Ray
from spheretrace.shapes import Sphere, World, HitRecord, Hittable
from spheretrace.materials import Lambertian


class TestSphere:
    """Test Sphere class."""

    def test_creation(self):
        center = Point3(0, 0, 0)
        mat = Lambertian(Color(1, 1, 1))
        sphere = Sphere(center, 1.0, mat)
        assert sphere.center == center
        assert sphere.radius == 1.0
        assert sphere.material is mat

    def test_is_hittable(self):
        assert isinstance(Sphere(Point3(0, 0, 0), 1.0), Hittable)

    def test_sphere_at_origin(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color.fill(1.0)))
        ray = Ray(Point3(0, 0, -2), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.0, float('inf'))

        assert hit is not None
        assert hit.point == Point3(0, 0, -1)
        assert abs(hit.t - 1.0) < 1e-12

    def test_hit_carries_material(self):
        mat = Lambertian(Color(0.2, 0.3, 0.4))
        sphere = Sphere(Point3(0, 0, 0), 1.0, mat)
        hit = sphere.hit(Ray(Point3(0, 0, -2), Vec3(0, 0, 1)), 0.0, float('inf'))
        assert hit.material is mat

    def test_normal_is_outward_unit(self):
        sphere = Sphere(Point3(1, 2, 3), 2.0)
        hit = sphere.hit(Ray(Point3(1, 2, -5), Vec3(0, 0, 1)), 0.001, float('inf'))
        assert hit.normal == Vec3(0, 0, -1)

    def test_hit_from_inside_uses_far_root(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        hit = sphere.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0.001, float('inf'))

        assert hit is not None
        assert abs(hit.t - 1.0) < 1e-12
        # Normal is not flipped toward the ray
        assert hit.normal == Vec3(0, 0, 1)
        assert hit.front_face(Ray(Point3(0, 0, 0), Vec3(0, 0, 1))) is False

    def test_front_face_from_outside(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')).front_face(ray) is True

    def test_unnormalized_direction(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 2)), 0.001, float('inf'))
        assert abs(hit.t - 2.0) < 1e-12
        assert hit.point == Point3(0, 0, -1)

    def test_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        # Passes 2 units from the center
        ray = Ray(Point3(2, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_behind_ray_is_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, 5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_tangent_is_miss_without_nan(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(1, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_near_tangent_hit_is_finite(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(1 - 1e-9, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, float('inf'))
        if hit is not None:
            assert not math.isnan(hit.t)
            assert not any(math.isnan(c) for c in hit.normal)

    def test_zero_direction_is_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 0))
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_t_range_is_exclusive(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -2), Vec3(0, 0, 1))
        # Near root at t=1 excluded by t_max, far root at t=3 too
        assert sphere.hit(ray, 0.0, 1.0) is None
        # Near root excluded by t_min, far root accepted
        hit = sphere.hit(ray, 1.0, float('inf'))
        assert abs(hit.t - 3.0) < 1e-12

    def test_t_max_limits_far_root(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -2), Vec3(0, 0, 1))
        assert sphere.hit(ray, 1.5, 2.5) is None

    def test_negative_radius_flips_normal(self):
        sphere = Sphere(Point3(0, 0, 0), -1.0)
        hit = sphere.hit(Ray(Point3(0, 0, -2), Vec3(0, 0, 1)), 0.001, float('inf'))
        assert hit.normal == Vec3(0, 0, 1)

    def test_repr(self):
        assert "Sphere" in repr(Sphere(Point3(0, 0, 0), 1.0))


class TestHitRecord:

    def test_fields(self):
        rec = HitRecord(t=2.0, point=Point3(1, 2, 3), normal=Vec3(0, 1, 0))
        assert rec.t == 2.0
        assert rec.material is None


class TestWorld:
    """Test the World container."""

    def test_empty_world_misses(self):
        world = World()
        assert len(world) == 0
        assert world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float('inf')) is None

    def test_add_and_iterate(self):
        world = World()
        s1 = Sphere(Point3(0, 0, -1), 0.5)
        s2 = Sphere(Point3(0, 0, -3), 0.5)
        world.add(s1)
        world.add(s2)
        assert len(world) == 2
        assert list(world) == [s1, s2]

    def test_construct_from_iterable(self):
        world = World(Sphere(Point3(i, 0, -1), 0.1) for i in range(3))
        assert len(world) == 3

    def test_clear(self):
        world = World([Sphere(Point3(0, 0, -1), 0.5)])
        world.clear()
        assert len(world) == 0

    def test_world_is_hittable(self):
        assert isinstance(World(), Hittable)

    def test_closest_hit_wins(self):
        near = Lambertian(Color(1, 0, 0))
        far = Lambertian(Color(0, 0, 1))
        world = World([
            Sphere(Point3(0, 0, -10), 1.0, far),
            Sphere(Point3(0, 0, -3), 1.0, near),
        ])
        hit = world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float('inf'))
        assert hit.material is near
        assert abs(hit.t - 2.0) < 1e-12

    @pytest.mark.parametrize("reverse", [False, True])
    def test_order_does_not_matter(self, reverse):
        spheres = [
            Sphere(Point3(0, 0, -3), 1.0),
            Sphere(Point3(0, 0, -6), 1.0),
            Sphere(Point3(0, 0, -9), 1.0),
        ]
        if reverse:
            spheres.reverse()
        hit = World(spheres).hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float('inf'))
        assert abs(hit.t - 2.0) < 1e-12

    def test_respects_t_max(self):
        world = World([Sphere(Point3(0, 0, -10), 1.0)])
        assert world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, 5.0) is None

    def test_nested_worlds(self):
        inner = World([Sphere(Point3(0, 0, -2), 0.5)])
        outer = World([inner, Sphere(Point3(0, 0, -5), 0.5)])
        hit = outer.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float('inf'))
        assert abs(hit.t - 1.5) < 1e-12

    def test_repr(self):
        assert "1 objects" in repr(World([Sphere(Point3(0, 0, -1), 0.5)]))
