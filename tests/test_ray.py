"""Unit tests for the ray and vector utility module.

Tests cover:
- Ray construction and evaluation
- Vector helpers (length, normalize, dot, cross, reflect, refract)
- Schlick Fresnel approximation
- Random sampling helpers stay inside their domains
- Interval queries and clamping
"""

import math

import numpy as np
import pytest


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at_origin(self):
        """Test that t=0 returns the origin."""
        from src.pathtracer.core.ray import Ray, ray_at

        ray = Ray((1.0, 2.0, 3.0), (0.0, 0.0, -1.0))
        assert np.allclose(ray_at(ray, 0.0), [1.0, 2.0, 3.0])

    def test_ray_at_positive_t(self):
        """Test evaluation along an unnormalized direction."""
        from src.pathtracer.core.ray import Ray

        ray = Ray((0.0, 0.0, 0.0), (0.0, 2.0, 0.0))
        assert np.allclose(ray.at(2.5), [0.0, 5.0, 0.0])

    def test_ray_converts_sequences_to_float_arrays(self):
        """Test that tuples are stored as float64 vectors."""
        from src.pathtracer.core.ray import Ray

        ray = Ray((0, 0, 0), (1, 0, 0))
        assert ray.origin.dtype == np.float64
        assert ray.direction.shape == (3,)

    def test_ray_is_immutable(self):
        """Test that ray fields cannot be reassigned."""
        from dataclasses import FrozenInstanceError

        from src.pathtracer.core.ray import Ray

        ray = Ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        with pytest.raises(FrozenInstanceError):
            ray.origin = (1.0, 1.0, 1.0)

    def test_as_vec3_rejects_wrong_shape(self):
        """Test that non-3-vectors are rejected."""
        from src.pathtracer.core.ray import as_vec3

        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))


class TestVectorUtilities:
    """Tests for vector helper functions."""

    def test_length(self):
        from src.pathtracer.core.ray import length, length_squared, vec3

        v = vec3(3.0, 4.0, 0.0)
        assert length(v) == pytest.approx(5.0)
        assert length_squared(v) == pytest.approx(25.0)

    def test_normalize_produces_unit_vector(self):
        from src.pathtracer.core.ray import length, normalize, vec3

        assert length(normalize(vec3(1.0, -2.0, 3.0))) == pytest.approx(1.0)

    def test_normalize_zero_vector_returns_zero(self):
        from src.pathtracer.core.ray import normalize, vec3

        assert np.allclose(normalize(vec3()), 0.0)

    def test_cross_right_handed(self):
        """Test x cross y = z."""
        from src.pathtracer.core.ray import cross, vec3

        assert np.allclose(cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0)), [0.0, 0.0, 1.0])

    def test_reflect_normal_incidence(self):
        """Test that a ray hitting head-on reflects straight back."""
        from src.pathtracer.core.ray import reflect, vec3

        result = reflect(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
        assert np.allclose(result, [0.0, 1.0, 0.0])

    def test_reflect_45_degrees(self):
        from src.pathtracer.core.ray import reflect, vec3

        s = 1.0 / math.sqrt(2.0)
        result = reflect(vec3(s, -s, 0.0), vec3(0.0, 1.0, 0.0))
        assert np.allclose(result, [s, s, 0.0])

    def test_refract_eta_one_passes_straight_through(self):
        """Test that matched indices do not bend the ray."""
        from src.pathtracer.core.ray import normalize, refract, vec3

        incident = normalize(vec3(1.0, -1.0, 0.0))
        result = refract(incident, vec3(0.0, 1.0, 0.0), 1.0)
        assert np.allclose(result, incident)

    def test_refract_obeys_snell(self):
        """Test n1 sin(theta1) = n2 sin(theta2) for air to glass."""
        from src.pathtracer.core.ray import normalize, refract, vec3

        incident = normalize(vec3(1.0, -1.0, 0.0))
        eta = 1.0 / 1.5
        result = refract(incident, vec3(0.0, 1.0, 0.0), eta)

        sin_in = abs(incident[0])
        sin_out = abs(result[0]) / np.linalg.norm(result)
        assert sin_out == pytest.approx(eta * sin_in)
        assert result[1] < 0.0

    def test_schlick_normal_incidence(self):
        """Test that head-on reflectance equals r0."""
        from src.pathtracer.core.ray import schlick_fresnel

        r0 = ((1.0 - 1.5) / (1.0 + 1.5)) ** 2
        assert schlick_fresnel(1.0, 1.5) == pytest.approx(r0)

    def test_schlick_grazing_angle_reflects_everything(self):
        from src.pathtracer.core.ray import schlick_fresnel

        assert schlick_fresnel(0.0, 1.5) == pytest.approx(1.0)

    def test_near_zero(self):
        from src.pathtracer.core.ray import near_zero, vec3

        assert near_zero(vec3(1e-9, -1e-9, 0.0))
        assert not near_zero(vec3(1e-3, 0.0, 0.0))


class TestRandomSampling:
    """Tests for Monte Carlo sampling helpers."""

    def test_random_in_unit_sphere_inside(self, rng):
        from src.pathtracer.core.ray import length, random_in_unit_sphere

        for _ in range(200):
            assert length(random_in_unit_sphere(rng)) < 1.0

    def test_random_unit_vector_has_unit_length(self, rng):
        from src.pathtracer.core.ray import length, random_unit_vector

        for _ in range(200):
            assert length(random_unit_vector(rng)) == pytest.approx(1.0)

    def test_random_in_unit_disk_flat_and_inside(self, rng):
        from src.pathtracer.core.ray import random_in_unit_disk

        for _ in range(200):
            p = random_in_unit_disk(rng)
            assert p[2] == 0.0
            assert p[0] ** 2 + p[1] ** 2 < 1.0

    def test_same_seed_same_samples(self):
        """Test that sampling is reproducible from a seed."""
        from src.pathtracer.core.ray import random_unit_vector

        a = random_unit_vector(np.random.default_rng(7))
        b = random_unit_vector(np.random.default_rng(7))
        assert np.array_equal(a, b)


class TestInterval:
    """Tests for the Interval type."""

    def test_contains_is_closed(self):
        from src.pathtracer.core.interval import Interval

        interval = Interval(0.0, 1.0)
        assert interval.contains(0.0)
        assert interval.contains(1.0)
        assert not interval.contains(1.5)

    def test_surrounds_is_open(self):
        from src.pathtracer.core.interval import Interval

        interval = Interval(0.0, 1.0)
        assert interval.surrounds(0.5)
        assert not interval.surrounds(0.0)
        assert not interval.surrounds(1.0)

    def test_clamp(self):
        from src.pathtracer.core.interval import Interval

        interval = Interval(0.0, 0.999)
        assert interval.clamp(-1.0) == 0.0
        assert interval.clamp(2.0) == 0.999
        assert interval.clamp(0.5) == 0.5

    def test_empty_and_universe(self):
        from src.pathtracer.core.interval import EMPTY, UNIVERSE

        assert not EMPTY.contains(0.0)
        assert EMPTY.size < 0.0
        assert UNIVERSE.surrounds(1e300)

    def test_with_max_keeps_min(self):
        from src.pathtracer.core.interval import Interval

        narrowed = Interval(0.001, math.inf).with_max(5.0)
        assert narrowed == Interval(0.001, 5.0)
