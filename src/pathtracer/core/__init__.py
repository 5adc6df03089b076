"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector utilities and random sampling
    interval: Real intervals for ray parameter ranges and clamping
    integrator: Per-pixel path tracing and row-band rendering
    renderer: Worker scheduling, framebuffer ownership and pixel output

Random sampling always goes through an explicit numpy Generator so that every
render worker owns an independent stream.
"""

from .interval import EMPTY, UNIVERSE, Interval
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    near_zero,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    ray_at,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports
# (they depend on the camera package, which depends on core.ray).
# Import directly from src.pathtracer.core.integrator or src.pathtracer.core.renderer.

__all__ = [
    "Interval",
    "EMPTY",
    "UNIVERSE",
    "Ray",
    "Vec3",
    "ray_at",
    "vec3",
    "as_vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_fresnel",
    "near_zero",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
