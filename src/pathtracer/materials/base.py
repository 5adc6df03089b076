"""Material interface shared by all scattering models."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple, Protocol, runtime_checkable

import numpy as np

from src.pathtracer.core.ray import Ray, Vec3, as_vec3

if TYPE_CHECKING:
    from src.pathtracer.scene.hittable import HitRecord


class ScatterResult(NamedTuple):
    """Outcome of a successful scatter.

    Attributes:
        attenuation: Linear RGB factor applied to light carried by the new ray.
        scattered: The outgoing ray.
    """

    attenuation: Vec3
    scattered: Ray


@runtime_checkable
class Material(Protocol):
    """A surface that decides how incoming rays leave it."""

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Return the attenuated outgoing ray, or None if the ray is absorbed."""
        ...


def validate_albedo(albedo: Sequence[float] | Vec3) -> Vec3:
    """Convert an albedo to a vector and check energy conservation.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    result = as_vec3(albedo)
    for i, component in enumerate(result):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return result
