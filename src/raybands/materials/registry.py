"""Material registry and scatter dispatch.

All materials share one id space. Each id maps to a tag from the closed
MaterialType enumeration plus the parameters every variant may need (albedo
and fuzz), stored in Taichi fields so kernels can look them up by id.

Materials are immutable once registered. Any number of spheres may refer to
the same id.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.materials import MetalMaterial, add_material
    >>> chrome = add_material(MetalMaterial(albedo=(0.9, 0.9, 0.9), fuzz=0.1))
"""

from enum import IntEnum

import taichi as ti

from raybands.core.ray import vec3
from raybands.materials.diffuse import DiffuseMaterial, scatter_diffuse
from raybands.materials.metal import MetalMaterial, scatter_metal


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used for material dispatch in the path tracer to determine which
    scattering function to call.
    """

    DIFFUSE = 0
    METAL = 1


Material = DiffuseMaterial | MetalMaterial

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

material_types = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzz = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def material_type_of(material: Material) -> MaterialType:
    """Return the tag for a material description.

    Raises:
        TypeError: If the object is not a known material description.
    """
    if isinstance(material, DiffuseMaterial):
        return MaterialType.DIFFUSE
    if isinstance(material, MetalMaterial):
        return MaterialType.METAL
    raise TypeError(f"Unknown material type: {type(material).__name__}")


def add_material(material: Material) -> int:
    """Register a material and return its id.

    Args:
        material: A DiffuseMaterial or MetalMaterial description.

    Returns:
        The id to assign to spheres using this material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        TypeError: If the material type is unknown.
    """
    mat_type = material_type_of(material)

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_types[idx] = int(mat_type)
    material_albedos[idx] = list(material.albedo)
    material_fuzz[idx] = material.fuzz if mat_type == MaterialType.METAL else 0.0
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of registered materials."""
    return int(num_materials[None])


@ti.func
def scatter_material(
    material_id: ti.i32,
    incident_direction: vec3,
    hit_point: vec3,
    normal: vec3,
    stream: ti.i32,
):
    """Dispatch to the scattering function of a material.

    The scattered ray starts at hit_point and follows the returned direction.

    Args:
        material_id: The material id of the hit sphere.
        incident_direction: The incoming ray direction.
        hit_point: The intersection point.
        normal: The outward surface normal.
        stream: The random stream owned by the calling band.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter). Unknown
        tags absorb the ray.
    """
    mat_type = material_types[material_id]
    albedo = material_albedos[material_id]

    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0

    if mat_type == int(MaterialType.DIFFUSE):
        scattered_direction, attenuation, did_scatter = scatter_diffuse(
            albedo, hit_point, normal, stream
        )

    elif mat_type == int(MaterialType.METAL):
        scattered_direction, attenuation, did_scatter = scatter_metal(
            albedo, material_fuzz[material_id], incident_direction, normal, stream
        )

    return scattered_direction, attenuation, did_scatter
