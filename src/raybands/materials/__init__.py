"""Materials module for surface scattering.

Components:
    diffuse: Matte scattering toward a random point above the surface
    metal: Mirror reflection with optional fuzz
    registry: Unified material id space and scatter dispatch

Each material provides a scatter function returning
(scattered_direction, attenuation, did_scatter). The set of materials is
closed; the path tracer dispatches on a MaterialType tag.
"""

from .diffuse import DiffuseMaterial, scatter_diffuse, validate_albedo
from .metal import MetalMaterial, scatter_metal
from .registry import (
    MAX_MATERIALS,
    Material,
    MaterialType,
    add_material,
    clear_materials,
    get_material_count,
    material_type_of,
    scatter_material,
)

__all__ = [
    "DiffuseMaterial",
    "MetalMaterial",
    "Material",
    "MaterialType",
    "MAX_MATERIALS",
    "add_material",
    "clear_materials",
    "get_material_count",
    "material_type_of",
    "scatter_diffuse",
    "scatter_metal",
    "scatter_material",
    "validate_albedo",
]
