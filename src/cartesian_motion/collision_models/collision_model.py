"""Define the collision geometry of a single robot link."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cartesian_motion.collision_models.meshes import compute_aabb, load_trimesh_from_yaml_data
from cartesian_motion.collision_models.primitive_shapes import (
    PrimitiveShape,
    create_primitive_shape,
)
from cartesian_motion.geometry import AxisAlignedBoundingBox, Point3D

if TYPE_CHECKING:
    from pathlib import Path

    import trimesh


@dataclass
class CollisionModel:
    """The meshes and primitive shapes making up a link, all expressed in the link frame."""

    meshes: list[trimesh.Trimesh] = field(default_factory=list)
    primitives: list[PrimitiveShape] = field(default_factory=list)

    @property
    def aabb(self) -> AxisAlignedBoundingBox:
        """Get the bounding box enclosing every mesh and primitive of the link."""
        boxes = [compute_aabb(m) for m in self.meshes] + [p.aabb for p in self.primitives]
        combined = AxisAlignedBoundingBox.union(boxes)
        if combined is None:
            raise ValueError("Cannot compute the bounding box of an empty collision model")
        return combined

    @property
    def extents(self) -> Point3D:
        """Get the (x,y,z) side lengths of the link's bounding box."""
        return self.aabb.extents

    @classmethod
    def from_yaml_data(cls, data: dict[str, Any], yaml_path: Path) -> CollisionModel:
        """Construct a link's collision model from its entry in a link geometry YAML file.

        :param data: Mapping with optional `meshes` and `primitives` lists
        :param yaml_path: Path to the YAML file (mesh filepaths are relative to it)
        :return: Collision model holding at least one mesh or primitive
        """
        meshes = [load_trimesh_from_yaml_data(m, yaml_path) for m in data.get("meshes", [])]
        primitives = [create_primitive_shape(p) for p in data.get("primitives", [])]

        if not meshes and not primitives:
            raise ValueError("Collision model must have at least one mesh or geometric primitive")

        return CollisionModel(meshes=meshes, primitives=primitives)
