"""Lambertian (ideal diffuse) material implementation.

This module implements the Lambertian BRDF, which models ideal diffuse reflection
where incident light is scattered in all directions weighted by the cosine of
the angle from the surface normal.

Scattered directions are generated by adding a random unit vector to the
surface normal, which produces a cosine-weighted distribution about the normal.
With this importance sampling the BRDF and pdf cancel, so the attenuation is
simply the albedo.

Example:
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> ground = Lambertian(albedo=(0.5, 0.5, 0.5))
    >>> result = ground.scatter(ray, rec, rng)  # never None
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from src.pathtracer.core.ray import Ray, Vec3, near_zero, random_unit_vector
from src.pathtracer.materials.base import ScatterResult, validate_albedo

if TYPE_CHECKING:
    from src.pathtracer.scene.hittable import HitRecord


class Lambertian:
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    def __init__(self, albedo: Sequence[float] | Vec3) -> None:
        """Create a diffuse material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        self.albedo = validate_albedo(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> ScatterResult:
        """Scatter into a cosine-weighted direction about the normal.

        Lambertian surfaces always scatter; absorption is expressed through
        the albedo instead.

        Args:
            ray_in: The incoming ray (unused; diffuse scattering ignores it).
            rec: The hit record at the surface.
            rng: Random generator owned by the calling worker.

        Returns:
            The attenuation (albedo) and the scattered ray.
        """
        scatter_direction = rec.normal + random_unit_vector(rng)

        # Handle degenerate case where the random vector cancels the normal
        if near_zero(scatter_direction):
            scatter_direction = rec.normal

        return ScatterResult(self.albedo, Ray(rec.point, scatter_direction))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={tuple(float(c) for c in self.albedo)})"
