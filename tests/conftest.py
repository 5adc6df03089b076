"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator and small deterministic stand-ins for scenes and materials.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from src.pathtracer.core.interval import Interval
from src.pathtracer.core.ray import Ray, vec3
from src.pathtracer.materials.base import ScatterResult
from src.pathtracer.scene.hittable import HitRecord


class AbsorbingMaterial:
    """Material that absorbs every ray."""

    def scatter(self, ray_in, rec, rng):
        return None


class ConstantMaterial:
    """Material that always scatters along a fixed direction."""

    def __init__(self, attenuation, direction=(0.0, 1.0, 0.0)):
        self.attenuation = vec3(*attenuation)
        self.direction = vec3(*direction)

    def scatter(self, ray_in, rec, rng):
        return ScatterResult(self.attenuation, Ray(rec.point, self.direction))


class AlwaysHit:
    """Hittable that reports a hit at t=1 for every ray."""

    def __init__(self, material):
        self.material = material
        self.calls = 0

    def hit(self, ray: Ray, ray_t: Interval):
        self.calls += 1
        return HitRecord.from_outward_normal(ray, 1.0, ray.at(1.0), vec3(0.0, 1.0, 0.0), self.material)


class NeverHit:
    """Hittable with no geometry."""

    def hit(self, ray: Ray, ray_t: Interval):
        return None


@pytest.fixture
def rng():
    """Seeded generator for reproducible sampling."""
    return np.random.default_rng(42)


@pytest.fixture
def empty_world():
    from src.pathtracer.scene.hittable import HittableList

    return HittableList()


@pytest.fixture
def absorbing_material():
    return AbsorbingMaterial()


@pytest.fixture
def constant_material_factory():
    return ConstantMaterial


@pytest.fixture
def always_hit_factory():
    return AlwaysHit


@pytest.fixture
def never_hit():
    return NeverHit()


@pytest.fixture
def hit_range():
    return Interval(0.001, math.inf)
