"""Unit tests for sphere intersection and hittable lists.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Hits outside the accepted t interval
- HittableList returning the closest hit
"""

import math

import numpy as np
import pytest


@pytest.fixture
def material():
    from src.pathtracer.materials.lambertian import Lambertian

    return Lambertian((0.5, 0.5, 0.5))


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self, material, hit_range):
        """Test ray hitting sphere head-on from outside."""
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        record = sphere.hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, -1.0)), hit_range)

        assert record is not None
        assert record.t == pytest.approx(4.0)
        assert np.allclose(record.point, [0.0, 0.0, 1.0])
        assert np.allclose(record.normal, [0.0, 0.0, 1.0])
        assert record.front_face
        assert record.material is material

    def test_unnormalized_direction(self, material, hit_range):
        """Test that t scales with the direction length."""
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        record = sphere.hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, -2.0)), hit_range)

        assert record.t == pytest.approx(2.0)
        assert np.allclose(record.point, [0.0, 0.0, 1.0])

    def test_miss(self, material, hit_range):
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        assert sphere.hit(Ray((0.0, 2.0, 5.0), (0.0, 0.0, -1.0)), hit_range) is None

    def test_sphere_behind_ray(self, material, hit_range):
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        assert sphere.hit(Ray((0.0, 0.0, 5.0), (0.0, 0.0, 1.0)), hit_range) is None

    def test_inside_hits_back_face(self, material, hit_range):
        """Test that a ray from the center hits the far wall with a flipped normal."""
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 2.0, material)
        record = sphere.hit(Ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)), hit_range)

        assert record.t == pytest.approx(2.0)
        assert not record.front_face
        assert np.allclose(record.normal, [-1.0, 0.0, 0.0])

    def test_t_max_excludes_far_hit(self, material):
        from src.pathtracer.core.interval import Interval
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        ray = Ray((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert sphere.hit(ray, Interval(0.001, 3.0)) is None

    def test_t_min_skips_near_root(self, material):
        """Test that a near root below t_min falls through to the far root."""
        from src.pathtracer.core.interval import Interval
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        ray = Ray((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        record = sphere.hit(ray, Interval(4.5, math.inf))

        assert record.t == pytest.approx(6.0)
        assert not record.front_face

    def test_surface_origin_ignores_self_hit(self, material, hit_range):
        """Test that a ray leaving the surface outward does not re-hit it."""
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, material)
        assert sphere.hit(Ray((0.0, 1.0, 0.0), (0.0, 1.0, 0.0)), hit_range) is None

    def test_normal_is_unit_length(self, material, hit_range):
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere

        sphere = Sphere((1.0, -2.0, -3.0), 0.75, material)
        record = sphere.hit(Ray((0.0, 0.0, 0.0), (1.0, -2.0, -3.0)), hit_range)
        assert np.linalg.norm(record.normal) == pytest.approx(1.0)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, material, radius):
        from src.pathtracer.geometry.sphere import Sphere

        with pytest.raises(ValueError):
            Sphere((0.0, 0.0, 0.0), radius, material)


class TestHittableList:
    """Tests for closest-hit aggregation."""

    def test_empty_list_misses(self, empty_world, hit_range):
        from src.pathtracer.core.ray import Ray

        assert empty_world.hit(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)), hit_range) is None

    def test_returns_closest_regardless_of_order(self, material, hit_range):
        from src.pathtracer.core.ray import Ray
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.metal import Metal
        from src.pathtracer.scene.hittable import HittableList

        far = Sphere((0.0, 0.0, -10.0), 1.0, Metal((0.9, 0.9, 0.9)))
        near = Sphere((0.0, 0.0, -3.0), 1.0, material)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        for objects in ([far, near], [near, far]):
            record = HittableList(objects).hit(ray, hit_range)
            assert record.t == pytest.approx(2.0)
            assert record.material is material

    def test_add_and_clear(self, material):
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.scene.hittable import Hittable, HittableList

        world = HittableList()
        world.add(Sphere((0.0, 0.0, -1.0), 0.5, material))
        assert len(world) == 1
        assert all(isinstance(obj, Hittable) for obj in world)

        world.clear()
        assert len(world) == 0


class TestHitRecord:
    """Tests for face orientation."""

    def test_set_face_normal_flips_for_back_face(self, material):
        from src.pathtracer.core.ray import Ray, vec3
        from src.pathtracer.scene.hittable import HitRecord

        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        record = HitRecord.from_outward_normal(
            ray, 1.0, vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, -1.0), material
        )

        assert not record.front_face
        assert np.allclose(record.normal, [0.0, 0.0, 1.0])
