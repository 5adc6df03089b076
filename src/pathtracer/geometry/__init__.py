"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with robust ray-sphere intersection

Every primitive implements the hittable interface:
    record = shape.hit(ray, Interval(t_min, t_max))  # HitRecord or None
"""

from .sphere import Sphere

__all__ = [
    "Sphere",
]
