"""Scene manager coordinating spheres and materials.

The SceneManager is the host-side facade used to build a scene before
rendering. It registers materials in the unified id space, adds spheres
that refer to them, and keeps plain Python records of both.

A scene can also be loaded from a list of SphereSpec descriptions. Every
distinct material object is registered once, so spheres that were given
the same material object share one id.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.materials import DiffuseMaterial
    >>> from raybands.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> grey = scene.add_material(DiffuseMaterial(albedo=(0.5, 0.5, 0.5)))
    >>> scene.add_sphere((0, -100.5, -1), 100.0, grey)
"""

from dataclasses import dataclass

from raybands.core.ray import vec3
from raybands.materials.registry import (
    Material,
    MaterialType,
    add_material,
    clear_materials,
    get_material_count,
    material_type_of,
)
from raybands.scene.intersection import (
    add_sphere,
    clear_scene,
)


@dataclass(frozen=True)
class SphereSpec:
    """Description of one sphere in a scene.

    Attributes:
        center: The center of the sphere (x, y, z).
        radius: The radius of the sphere.
        material: The material description. Spheres given the same object
            share one registered material.
    """

    center: tuple[float, float, float]
    radius: float
    material: Material


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The unified material id.
        material_type: The material tag.
        material: The description the material was registered from.
    """

    material_id: int
    material_type: MaterialType
    material: Material


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material id assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


class SceneManager:
    """Host-side scene builder.

    Attributes:
        materials: MaterialInfo for all registered materials.
        spheres: SphereInfo for all spheres in the scene.
    """

    def __init__(self) -> None:
        """Initialize an empty scene, clearing any previous one."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_scene()
        clear_materials()
        self.materials.clear()
        self.spheres.clear()

    def clear(self) -> None:
        """Clear the entire scene (spheres and materials)."""
        self._clear_all()

    def add_material(self, material: Material) -> int:
        """Register a material.

        Args:
            material: A DiffuseMaterial or MetalMaterial description.

        Returns:
            The material id for this material.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            TypeError: If the material type is unknown.
        """
        material_id = add_material(material)
        self.materials.append(
            MaterialInfo(
                material_id=material_id,
                material_type=material_type_of(material),
                material=material,
            )
        )
        return material_id

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            material_id: A material id returned by add_material.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If material_id is invalid or the radius is not positive.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        if material_id < 0 or material_id >= get_material_count():
            raise ValueError(f"Invalid material_id: {material_id}")

        center_vec = vec3(center[0], center[1], center[2])
        sphere_index = add_sphere(center_vec, radius, material_id)

        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=center,
                radius=radius,
                material_id=material_id,
            )
        )
        return sphere_index

    def load_spheres(self, specs: list[SphereSpec]) -> None:
        """Replace the scene with the given spheres.

        Args:
            specs: The spheres to add, in iteration order.
        """
        self._clear_all()
        ids: dict[int, int] = {}
        for spec in specs:
            key = id(spec.material)
            if key not in ids:
                ids[key] = self.add_material(spec.material)
            self.add_sphere(spec.center, spec.radius, ids[key])

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return len(self.spheres)

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self.materials)

    def __repr__(self) -> str:
        return (
            f"SceneManager(materials={len(self.materials)}, "
            f"spheres={len(self.spheres)})"
        )
