"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.

Example:
    >>> from src.pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(refraction_index=1.5)
    >>> bubble = Dielectric(refraction_index=1.0 / 1.5)  # air inside glass
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from src.pathtracer.core.ray import (
    Ray,
    dot,
    normalize,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)
from src.pathtracer.materials.base import ScatterResult

if TYPE_CHECKING:
    from src.pathtracer.scene.hittable import HitRecord


class Dielectric:
    """Dielectric (glass/water) material.

    Attributes:
        refraction_index: Refractive index in vacuum or air, or the ratio of
            the material's index over the enclosing medium's. Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    def __init__(self, refraction_index: float) -> None:
        """Create a dielectric material.

        Raises:
            ValueError: If refraction_index is not positive.
        """
        if not refraction_index > 0.0:
            raise ValueError(f"Refraction index must be positive, got {refraction_index}")
        self.refraction_index = float(refraction_index)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> ScatterResult:
        """Reflect or refract the incoming ray.

        Dielectrics never absorb, so the attenuation is always white.

        Args:
            ray_in: The incoming ray.
            rec: The hit record; front_face selects the refraction ratio.
            rng: Random generator owned by the calling worker.

        Returns:
            White attenuation and the reflected or refracted ray.
        """
        attenuation = vec3(1.0, 1.0, 1.0)

        # Entering the material: eta = 1/ior; leaving it: eta = ior
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = normalize(ray_in.direction)
        cos_theta = min(dot(-unit_direction, rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or schlick_fresnel(cos_theta, ri) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return ScatterResult(attenuation, Ray(rec.point, direction))

    def __repr__(self) -> str:
        return f"Dielectric(refraction_index={self.refraction_index})"
