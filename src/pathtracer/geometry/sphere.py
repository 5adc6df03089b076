"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere hittable using the robust quadratic formula from
Ray Tracing Gems to avoid floating-point artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability.

Example:
    >>> from src.pathtracer.geometry.sphere import Sphere
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> sphere = Sphere(center=(0.0, 0.0, -1.0), radius=0.5, material=Lambertian((0.5, 0.5, 0.5)))
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.interval import Interval
from src.pathtracer.core.ray import Ray, Vec3, as_vec3, dot
from src.pathtracer.scene.hittable import HitRecord

if TYPE_CHECKING:
    from src.pathtracer.materials.base import Material


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve quadratic equation using robust formula from Ray Tracing Gems.

    Solves a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-10:
        # Tangent ray through a near-zero q; fall back to the textbook formula
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The surface material.
    """

    def __init__(self, center: Sequence[float] | Vec3, radius: float, material: Material) -> None:
        """Create a sphere.

        Raises:
            ValueError: If radius is not positive.
        """
        if not radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = as_vec3(center)
        self.radius = float(radius)
        self.material = material

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Test for ray-sphere intersection using robust quadratic formula.

        The ray-sphere intersection is found by solving:
            |ray_origin + t * ray_direction - center|^2 = radius^2

        Expanding and rearranging gives the quadratic equation:
            a*t^2 + 2*h*t + c = 0

        where:
            a = dot(direction, direction)
            h = dot(direction, oc)  (half of traditional b)
            c = dot(oc, oc) - radius^2
            oc = origin - center

        Args:
            ray: The ray to test (direction need not be normalized).
            ray_t: Open interval of acceptable t values.

        Returns:
            A HitRecord for the nearest root strictly inside ray_t, or None.
        """
        oc = ray.origin - self.center

        a = dot(ray.direction, ray.direction)
        if a == 0.0:
            return None
        h = dot(ray.direction, oc)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

        # Find the nearest root that lies in the acceptable range
        t = t0
        if not ray_t.surrounds(t):
            t = t1
            if not ray_t.surrounds(t):
                return None

        point = ray.at(t)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, t, point, outward_normal, self.material)

    def __repr__(self) -> str:
        c = self.center
        return f"Sphere(center=({c[0]}, {c[1]}, {c[2]}), radius={self.radius}, material={self.material!r})"
