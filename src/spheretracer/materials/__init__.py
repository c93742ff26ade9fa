"""Materials module for light scattering models.

This module implements the three supported material kinds:

Components:
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzziness
    dielectric: Glass-like materials with refraction (Schlick reflectance)
    material: Material variant type and scattering dispatch

Each material provides a scatter function returning
(did_scatter, scattered_ray, attenuation). All scattering computations are
Numba-compiled functions that take an explicit random stream state.
"""

from .dielectric import (
    DIAMOND_REFRACTION,
    VACUUM_REFRACTION,
    WATER_20_CELSIUS_REFRACTION,
    WINDOW_GLASS_REFRACTION,
    reflectance,
    refraction_ratio_for,
    scatter_dielectric,
)
from .lambertian import lambertian_direction, scatter_lambertian
from .material import Material, MaterialType, dielectric, lambertian, metal, scatter
from .metal import fuzzy_reflection, scatter_metal

__all__ = [
    # Variant
    "Material",
    "MaterialType",
    "lambertian",
    "metal",
    "dielectric",
    "scatter",
    # Lambertian
    "scatter_lambertian",
    "lambertian_direction",
    # Metal
    "scatter_metal",
    "fuzzy_reflection",
    # Dielectric
    "scatter_dielectric",
    "reflectance",
    "refraction_ratio_for",
    "VACUUM_REFRACTION",
    "WINDOW_GLASS_REFRACTION",
    "WATER_20_CELSIUS_REFRACTION",
    "DIAMOND_REFRACTION",
]
