"""CPU ray tracer for sphere scenes, compiled with Numba.

This package renders scenes of spheres with diffuse, metallic and dielectric
materials, with support for:
- Thin-lens depth of field
- Seedable, per-row random streams for reproducible parallel renders
- Progressive rendering with accumulation
- PNG and plain-text PPM output

Subpackages:
    core: Vector utilities, rays, random sampling, integrator, and rendering loop
    geometry: Sphere primitive and intersection algorithm
    materials: Scattering models
    scene: Scene management, packed scene storage, and example scenes
    camera: Thin-lens camera with ray generation
    preview: Output encoding and preview utilities
"""

__version__ = "0.1.0"
