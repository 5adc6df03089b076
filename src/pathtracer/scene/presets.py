"""Preset scenes with matching camera configurations.

Scenes:
    three_spheres: A diffuse sphere flanked by a hollow glass sphere and a
        fuzzy gold sphere, resting on a large yellow-green ground sphere.
    random_spheres: The classic final scene: a field of small randomly placed
        diffuse, metal and glass spheres around three large feature spheres.

Each factory returns a ``(world, config)`` tuple so it can be handed
straight to the renderer.

Example:
    >>> from src.pathtracer.core.renderer import Renderer
    >>> from src.pathtracer.scene.presets import create_three_spheres_scene
    >>> world, config = create_three_spheres_scene(image_width=200)
    >>> Renderer(config).render(world)
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

import numpy as np

from src.pathtracer.camera.thin_lens import CameraConfig
from src.pathtracer.core.ray import length, vec3
from src.pathtracer.geometry.sphere import Sphere
from src.pathtracer.materials.dielectric import Dielectric
from src.pathtracer.materials.lambertian import Lambertian
from src.pathtracer.materials.metal import Metal
from src.pathtracer.scene.hittable import HittableList

# Half-extent of the grid of small spheres in the random scene
GRID_EXTENT = 11

# Glass refractive index used by the presets
GLASS_IOR = 1.5


def create_three_spheres_scene(**overrides: Any) -> tuple[HittableList, CameraConfig]:
    """Create the three-spheres material showcase.

    Args:
        **overrides: CameraConfig fields replacing the preset camera values.

    Returns:
        Tuple of (world, camera config).
    """
    material_ground = Lambertian((0.8, 0.8, 0.0))
    material_center = Lambertian((0.1, 0.2, 0.5))
    material_left = Dielectric(GLASS_IOR)
    material_bubble = Dielectric(1.0 / GLASS_IOR)
    material_right = Metal((0.8, 0.6, 0.2), fuzz=1.0)

    world = HittableList(
        [
            Sphere((0.0, -100.5, -1.0), 100.0, material_ground),
            Sphere((0.0, 0.0, -1.2), 0.5, material_center),
            Sphere((-1.0, 0.0, -1.0), 0.5, material_left),
            Sphere((-1.0, 0.0, -1.0), 0.4, material_bubble),
            Sphere((1.0, 0.0, -1.0), 0.5, material_right),
        ]
    )

    config = CameraConfig(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        vfov=20.0,
        lookfrom=(-2.0, 2.0, 1.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return world, replace(config, **overrides)


def create_random_spheres_scene(
    rng: np.random.Generator | None = None,
    **overrides: Any,
) -> tuple[HittableList, CameraConfig]:
    """Create the random spheres scene.

    Small spheres are placed on a jittered grid; each picks a material at
    random: 80% diffuse, 15% metal, 5% glass. Spheres that would overlap the
    large metal sphere's footprint are skipped.

    Args:
        rng: Generator driving the layout. None uses a fresh default generator.
        **overrides: CameraConfig fields replacing the preset camera values.

    Returns:
        Tuple of (world, camera config).
    """
    if rng is None:
        rng = np.random.default_rng()

    world = HittableList()
    world.add(Sphere((0.0, -1000.0, 0.0), 1000.0, Lambertian((0.5, 0.5, 0.5))))

    clearing = vec3(4.0, 0.2, 0.0)
    for a in range(-GRID_EXTENT, GRID_EXTENT):
        for b in range(-GRID_EXTENT, GRID_EXTENT):
            choose_mat = rng.random()
            center = vec3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if length(center - clearing) <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = rng.random(3) * rng.random(3)
                world.add(Sphere(center, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = rng.uniform(0.5, 1.0, size=3)
                fuzz = rng.uniform(0.0, 0.5)
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                world.add(Sphere(center, 0.2, Dielectric(GLASS_IOR)))

    world.add(Sphere((0.0, 1.0, 0.0), 1.0, Dielectric(GLASS_IOR)))
    world.add(Sphere((-4.0, 1.0, 0.0), 1.0, Lambertian((0.4, 0.2, 0.1))))
    world.add(Sphere((4.0, 1.0, 0.0), 1.0, Metal((0.7, 0.6, 0.5), 0.0)))

    config = CameraConfig(
        aspect_ratio=16.0 / 9.0,
        image_width=1200,
        samples_per_pixel=500,
        max_depth=50,
        vfov=20.0,
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, replace(config, **overrides)
