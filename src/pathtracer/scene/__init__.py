"""Scene module for hit records, hittable containers and preset scenes.

Components:
    hittable: HitRecord, the Hittable interface and HittableList
    presets: Ready-made scenes paired with camera configurations

Scene containers hold any object exposing ``hit(ray, ray_t)``; the closest hit
wins. Materials are attached to each primitive and travel in the hit record.
"""

from .hittable import HitRecord, Hittable, HittableList

# Note: presets is NOT imported here to avoid circular imports
# (geometry.sphere imports scene.hittable, and presets imports geometry).
# Import directly from src.pathtracer.scene.presets when needed.

__all__ = [
    "HitRecord",
    "Hittable",
    "HittableList",
]
