"""Ray data structure and vector utilities for CPU ray tracing.

This module provides the fundamental Ray dataclass and vector utility functions
for Monte Carlo ray tracing. Vectors are plain 3-element float64 NumPy arrays,
so colors and points share the same arithmetic (addition, scalar and
component-wise multiplication).

Random sampling helpers take an explicit ``numpy.random.Generator`` so each
render worker can own its own independent stream.

Example:
    >>> import numpy as np
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors (points, directions and linear RGB colors)
Vec3 = npt.NDArray[np.float64]


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
    """Create a 3D vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert a 3-sequence to a float64 vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.asarray(value, dtype=np.float64)
    if result.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {result.shape}")
    return result


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; camera rays are deliberately left unnormalized.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "direction", as_vec3(self.direction))

    def at(self, t: float) -> Vec3:
        """Return the point ``origin + t * direction``."""
        return self.origin + t * self.direction


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.at(t)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector."""
    return float(np.dot(v, v))


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = length(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product a . b."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return np.array(
        (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ),
        dtype=np.float64,
    )


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a unit normal: I - 2(I . N)N."""
    return incident - 2.0 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The caller is responsible for checking total internal reflection first;
    this function always returns a transmitted direction.

    Args:
        incident: The incoming direction (should be normalized).
        normal: The surface normal facing against the incident ray.
        eta: The ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(dot(-incident, normal), 1.0)
    r_out_perp = eta * (incident + cos_theta * normal)
    r_out_parallel = -math.sqrt(abs(1.0 - length_squared(r_out_perp))) * normal
    return r_out_perp + r_out_parallel


def schlick_fresnel(cosine: float, ref_idx: float) -> float:
    """Approximate Fresnel reflectance using Schlick's approximation."""
    r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


def near_zero(v: Vec3) -> bool:
    """Check if a vector is near zero in all components."""
    s = 1e-8
    return abs(v[0]) < s and abs(v[1]) < s and abs(v[2]) < s


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling over the enclosing cube.
    """
    while True:
        p = rng.uniform(-1.0, 1.0, size=3)
        lensq = length_squared(p)
        # Points too close to the center underflow when normalized
        if 1e-160 < lensq < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return normalize(random_in_unit_sphere(rng))


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point (x, y, 0) with x^2 + y^2 < 1.

    Useful for depth-of-field effects in camera simulation.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, size=2)
        if x * x + y * y < 1.0:
            return vec3(x, y, 0.0)
