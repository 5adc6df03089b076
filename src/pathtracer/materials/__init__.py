"""Materials module for surface scattering models.

Components:
    base: Material interface and ScatterResult
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides:
    - scatter(ray_in, hit_record, rng): the attenuated outgoing ray, or None
      when the incoming ray is absorbed
"""

from .base import Material, ScatterResult, validate_albedo
from .dielectric import Dielectric
from .lambertian import Lambertian
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "validate_albedo",
    "Lambertian",
    "Metal",
    "Dielectric",
]
