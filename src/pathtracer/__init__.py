"""CPU path tracer with a multi-threaded row-band scheduler.

This package renders scenes of spheres and simple materials by casting many
jittered camera rays per pixel and tracing their bounces through the scene.

Subpackages:
    core: Vectors, rays, intervals, the path-tracing integrator and the renderer
    camera: Thin-lens camera configuration and primary ray generation
    geometry: Shape primitives and intersection algorithms
    materials: Surface scattering models (Lambertian, metal, dielectric)
    scene: Hit records, hittable containers and preset scenes
    preview: Pixel output (PPM, PNG) and matplotlib preview
"""

__version__ = "0.1.0"
