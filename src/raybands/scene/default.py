"""Default demo scene: a red mirror ball resting on a grey ground sphere."""

from raybands.materials import DiffuseMaterial, MetalMaterial
from raybands.scene.manager import SphereSpec


def create_default_scene() -> list[SphereSpec]:
    """Build the two-sphere demo scene.

    Returns:
        A metal sphere (albedo (1.0, 0.2, 0.2), fuzz 0) of radius 0.5 at
        (0, 0, -1) and a diffuse grey ground sphere of radius 100 at
        (0, -100.5, -1).
    """
    return [
        SphereSpec(
            center=(0.0, 0.0, -1.0),
            radius=0.5,
            material=MetalMaterial(albedo=(1.0, 0.2, 0.2), fuzz=0.0),
        ),
        SphereSpec(
            center=(0.0, -100.5, -1.0),
            radius=100.0,
            material=DiffuseMaterial(albedo=(0.5, 0.5, 0.5)),
        ),
    ]
