"""Hit records and the hittable interface for ray-scene queries.

Any object with a ``hit(ray, ray_t)`` method can take part in a scene: a single
primitive, or a ``HittableList`` that aggregates many and reports the closest
intersection.

Example:
    >>> from src.pathtracer.core.interval import Interval
    >>> from src.pathtracer.geometry.sphere import Sphere
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> world = HittableList()
    >>> world.add(Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.5, 0.5, 0.5))))
    >>> record = world.hit(ray, Interval(0.001, math.inf))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from src.pathtracer.core.interval import Interval
from src.pathtracer.core.ray import Ray, Vec3, dot

if TYPE_CHECKING:
    from src.pathtracer.materials.base import Material


@dataclass(eq=False)
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point (unit length).
            Always points against the incoming ray.
        t: The parameter value along the ray where intersection occurred.
        front_face: True if the ray hit the outside of the surface.
        material: The material of the surface that was hit.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Vec3,
        outward_normal: Vec3,
        material: Material,
    ) -> HitRecord:
        """Build a record, orienting the normal against the ray.

        Args:
            ray: The incoming ray.
            t: Ray parameter of the hit.
            point: The hit point.
            outward_normal: Unit normal pointing out of the surface.
            material: The surface material.
        """
        record = cls(point=point, normal=outward_normal, t=t, front_face=True, material=material)
        record.set_face_normal(ray, outward_normal)
        return record

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Set the normal and front_face from an outward unit normal.

        Front face means the ray direction and outward normal point in
        opposite directions.
        """
        self.front_face = dot(ray.direction, outward_normal) < 0.0
        self.normal = outward_normal if self.front_face else -outward_normal


@runtime_checkable
class Hittable(Protocol):
    """Anything a ray can intersect."""

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Return the nearest hit with t strictly inside ray_t, or None."""
        ...


class HittableList:
    """A collection of hittables that reports the closest intersection.

    Attributes:
        objects: The contained hittables, in insertion order.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        self.objects.append(obj)

    def clear(self) -> None:
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Test every object, keeping the closest hit inside ray_t."""
        closest: HitRecord | None = None
        closest_so_far = ray_t.max

        for obj in self.objects:
            record = obj.hit(ray, ray_t.with_max(closest_so_far))
            if record is not None:
                closest = record
                closest_so_far = record.t

        return closest

    def __repr__(self) -> str:
        return f"HittableList(objects={len(self.objects)})"
