"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional fuzziness. Perfect metals (fuzz=0) produce mirror-like reflections,
while fuzzier metals scatter reflected rays within a cone.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

For fuzzy metals, the normalized reflected direction is perturbed by a random
unit vector scaled by the fuzz parameter. Rays perturbed below the surface are
absorbed.

Example:
    >>> from src.pathtracer.materials.metal import Metal
    >>> gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from src.pathtracer.core.ray import Ray, Vec3, dot, normalize, random_unit_vector, reflect
from src.pathtracer.materials.base import ScatterResult, validate_albedo

if TYPE_CHECKING:
    from src.pathtracer.scene.hittable import HitRecord


class Metal:
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
            Represents the color tint of reflected light.
        fuzz: The surface fuzziness in [0, 1]. 0 = perfect mirror.
    """

    def __init__(self, albedo: Sequence[float] | Vec3, fuzz: float = 0.0) -> None:
        """Create a metal material.

        Args:
            albedo: The reflective color as (R, G, B).
            fuzz: The surface fuzziness. Values above 1 are clamped to 1.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
            ValueError: If fuzz is negative.
        """
        if fuzz < 0.0:
            raise ValueError(
                f"Fuzz = {fuzz} is negative. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        self.albedo = validate_albedo(albedo)
        self.fuzz = min(float(fuzz), 1.0)

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Reflect the incoming ray, absorbing it if it ends up below the surface.

        Args:
            ray_in: The incoming ray.
            rec: The hit record at the surface.
            rng: Random generator owned by the calling worker.

        Returns:
            The attenuation (albedo) and reflected ray, or None if absorbed.
        """
        reflected = normalize(reflect(ray_in.direction, rec.normal))
        if self.fuzz > 0.0:
            reflected = reflected + self.fuzz * random_unit_vector(rng)

        if dot(reflected, rec.normal) <= 0.0:
            return None

        return ScatterResult(self.albedo, Ray(rec.point, reflected))

    def __repr__(self) -> str:
        return f"Metal(albedo={tuple(float(c) for c in self.albedo)}, fuzz={self.fuzz})"
