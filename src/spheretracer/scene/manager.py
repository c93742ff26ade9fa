"""Unified scene manager for coordinating spheres and materials.

Scenes are assembled in plain Python (lists of dataclasses) and packed into a
World of contiguous arrays with build(). Material ids are indices into one
list shared by all three material kinds, so a sphere refers to its material
by a single integer. Parameters are validated on insertion, and a scene can
round-trip through SceneConfig or a JSON-friendly dict.

Example:
    >>> from spheretracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> mat_id = scene.add_lambertian_material(albedo=(0.8, 0.3, 0.3))
    >>> scene.add_sphere_with_material(center=(0, 0, -1), radius=0.5, material_id=mat_id)
    (0, 0)
    >>> world = scene.build()
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from spheretracer.materials.dielectric import WINDOW_GLASS_REFRACTION
from spheretracer.materials.material import (
    Material,
    MaterialType,
    dielectric,
    lambertian,
    metal,
)
from spheretracer.scene.intersection import World, build_world

logger = logging.getLogger(__name__)


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The unified material ID.
        material_type: The type of material (Lambertian, Metal, Dielectric).
        params: The material parameters as provided during creation.
        material: The Material value handed to the render kernels.
    """

    material_id: int
    material_type: MaterialType
    params: dict[str, Any]
    material: Material


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere. Negative for an inverted sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


def _validate_albedo(albedo: tuple[float, float, float]) -> tuple[float, float, float]:
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have exactly 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return (float(albedo[0]), float(albedo[1]), float(albedo[2]))


class SceneManager:
    """Unified scene manager coordinating spheres and materials.

    The SceneManager provides a high-level API for building scenes with
    automatic material tracking. Material IDs are assigned in registration
    order across all material types.

    Attributes:
        materials: List of MaterialInfo for all registered materials.
        spheres: List of SphereInfo for all spheres in the scene.

    Example:
        >>> scene = SceneManager()
        >>> # Add materials
        >>> red_diffuse = scene.add_lambertian_material(albedo=(0.8, 0.1, 0.1))
        >>> gold_metal = scene.add_metal_material(albedo=(0.8, 0.6, 0.2), fuzziness=0.3)
        >>> glass = scene.add_dielectric_material(refraction_index=1.52)
        >>> # Add objects with materials
        >>> scene.add_sphere_with_material((0, 0, -1), 0.5, red_diffuse)
        >>> scene.add_sphere_with_material((1, 0, -1), 0.5, gold_metal)
        >>> scene.add_sphere_with_material((-1, 0, -1), 0.5, glass)
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []

    def clear(self) -> None:
        """Clear the entire scene (spheres and materials)."""
        self.materials.clear()
        self.spheres.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def _register(
        self, material_type: MaterialType, params: dict[str, Any], material: Material
    ) -> int:
        material_id = len(self.materials)
        self.materials.append(
            MaterialInfo(
                material_id=material_id,
                material_type=material_type,
                params=params,
                material=material,
            )
        )
        return material_id

    def add_lambertian_material(
        self,
        albedo: tuple[float, float, float],
    ) -> int:
        """Add a Lambertian (diffuse) material to the scene.

        Args:
            albedo: The diffuse reflectance color as (R, G, B) tuple.
                Each component must be in [0, 1] for energy conservation.

        Returns:
            The unified material ID for this material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        albedo = _validate_albedo(albedo)
        return self._register(
            MaterialType.LAMBERTIAN, {"albedo": albedo}, lambertian(albedo)
        )

    def add_metal_material(
        self,
        albedo: tuple[float, float, float],
        fuzziness: float = 0.0,
    ) -> int:
        """Add a metal (specular reflective) material to the scene.

        Fuzziness is stored as given. Values above 1 act as 1 when
        scattering; negative values are kept as they are.

        Args:
            albedo: The reflective color as (R, G, B) tuple.
                Each component must be in [0, 1].
            fuzziness: Reflection jitter. Default is 0 (perfect mirror).

        Returns:
            The unified material ID for this material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        albedo = _validate_albedo(albedo)
        fuzziness = float(fuzziness)
        if fuzziness < 0.0:
            logger.warning(
                "Metal fuzziness %.3f is negative; it is used unclamped", fuzziness
            )
        return self._register(
            MaterialType.METAL,
            {"albedo": albedo, "fuzziness": fuzziness},
            metal(albedo, fuzziness),
        )

    def add_dielectric_material(
        self,
        refraction_index: float = WINDOW_GLASS_REFRACTION,
    ) -> int:
        """Add a dielectric (glass/water) material to the scene.

        Args:
            refraction_index: Index of refraction relative to vacuum.
                Default is 1.52 (window glass).

        Returns:
            The unified material ID for this material.

        Raises:
            ValueError: If the refraction index is not positive.
        """
        refraction_index = float(refraction_index)
        if refraction_index <= 0.0:
            raise ValueError(
                f"Refraction index must be positive, got {refraction_index}"
            )
        return self._register(
            MaterialType.DIELECTRIC,
            {"refraction_index": refraction_index},
            dielectric(refraction_index),
        )

    def get_material_count(self) -> int:
        """Get the total number of materials in the scene."""
        return len(self.materials)

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get information about a material by ID.

        Args:
            material_id: The unified material ID.

        Returns:
            MaterialInfo for the material, or None if not found.
        """
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    def get_material_type(self, material_id: int) -> MaterialType | None:
        """Get the material type for a given material ID.

        Returns:
            The MaterialType, or None for invalid material IDs.
        """
        info = self.get_material_info(material_id)
        return None if info is None else info.material_type

    # =========================================================================
    # Sphere Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere. Negative builds an inverted
                sphere (for hollow shells); zero is rejected.
            material_id: The unified material ID to assign to the sphere.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If material_id is invalid, the radius is zero or the
                center is not a 3-vector.
        """
        if material_id < 0 or material_id >= len(self.materials):
            raise ValueError(f"Invalid material_id: {material_id}")
        if radius == 0.0:
            raise ValueError("Sphere radius must not be zero")
        if len(center) != 3:
            raise ValueError(f"Center must have exactly 3 components, got {len(center)}")

        info = SphereInfo(
            sphere_index=len(self.spheres),
            center=(float(center[0]), float(center[1]), float(center[2])),
            radius=float(radius),
            material_id=material_id,
        )
        self.spheres.append(info)

        return info.sphere_index

    # =========================================================================
    # Convenience Methods (add object with material in one call)
    # =========================================================================

    def add_sphere_with_material(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> tuple[int, int]:
        """Add a sphere with a pre-created material.

        This is a convenience alias for add_sphere() that makes the intent
        clearer when building scenes.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        sphere_index = self.add_sphere(center, radius, material_id)
        return sphere_index, material_id

    def add_lambertian_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
    ) -> tuple[int, int]:
        """Add a sphere with a new Lambertian material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_lambertian_material(albedo)
        sphere_index = self.add_sphere(center, radius, material_id)
        return sphere_index, material_id

    def add_metal_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
        fuzziness: float = 0.0,
    ) -> tuple[int, int]:
        """Add a sphere with a new metal material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_metal_material(albedo, fuzziness)
        sphere_index = self.add_sphere(center, radius, material_id)
        return sphere_index, material_id

    def add_dielectric_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        refraction_index: float = WINDOW_GLASS_REFRACTION,
    ) -> tuple[int, int]:
        """Add a sphere with a new dielectric material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_dielectric_material(refraction_index)
        sphere_index = self.add_sphere(center, radius, material_id)
        return sphere_index, material_id

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return len(self.spheres)

    def build(self) -> World:
        """Pack the scene into a World for rendering.

        Returns:
            A new World. Later changes to the manager do not affect it.
        """
        world = build_world(
            centers=[sphere.center for sphere in self.spheres],
            radii=[sphere.radius for sphere in self.spheres],
            material_ids=[sphere.material_id for sphere in self.spheres],
            materials=[info.material for info in self.materials],
        )
        logger.debug(
            "Built world with %d spheres and %d materials",
            len(self.spheres),
            len(self.materials),
        )
        return world

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig containing all materials and spheres.
        """
        config = SceneConfig()

        for mat in self.materials:
            mat_config: dict[str, Any] = {"type": mat.material_type.name.lower()}
            for key, value in mat.params.items():
                mat_config[key] = list(value) if isinstance(value, tuple) else value
            config.materials.append(mat_config)

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        # Load materials first (needed for spheres)
        for mat_config in config.materials:
            mat_type = mat_config.get("type", "").lower()
            if mat_type == "lambertian":
                self.add_lambertian_material(tuple(mat_config.get("albedo", [0.5, 0.5, 0.5])))
            elif mat_type == "metal":
                self.add_metal_material(
                    tuple(mat_config.get("albedo", [0.8, 0.8, 0.8])),
                    mat_config.get("fuzziness", 0.0),
                )
            elif mat_type == "dielectric":
                self.add_dielectric_material(
                    mat_config.get("refraction_index", WINDOW_GLASS_REFRACTION)
                )
            else:
                raise ValueError(f"Unknown material type: {mat_type}")

        for sphere_config in config.spheres:
            self.add_sphere(
                tuple(sphere_config.get("center", [0.0, 0.0, 0.0])),
                sphere_config.get("radius", 1.0),
                sphere_config.get("material_id", 0),
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Returns:
            A dictionary representation of the scene.
        """
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'materials' and 'spheres' keys.
        """
        self.from_config(
            SceneConfig(
                materials=data.get("materials", []),
                spheres=data.get("spheres", []),
            )
        )

    def __repr__(self) -> str:
        """Return a string representation of the scene contents."""
        return (
            f"SceneManager(materials={len(self.materials)}, "
            f"spheres={len(self.spheres)})"
        )
