"""Define functions loading link meshes and measuring their bounds."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import trimesh

from cartesian_motion.geometry import AxisAlignedBoundingBox, Point3D


def load_trimesh_from_file(mesh_path: Path) -> trimesh.Trimesh:
    """Load a mesh (e.g., STL, OBJ, or DAE) from the given file."""
    if not mesh_path.exists():
        raise FileNotFoundError(f"Cannot load mesh from nonexistent file: {mesh_path}")

    return trimesh.load_mesh(mesh_path)


def load_trimesh_from_yaml_data(data: dict[str, Any], yaml_path: Path) -> trimesh.Trimesh:
    """Load the mesh described by YAML data, resolving its filepath relative to the YAML file.

    An optional `scale` (one factor, or one per axis) is applied after loading, as link meshes
        are often authored in millimeters.

    :param data: Mapping with a `filepath` and an optional `scale`
    :param yaml_path: Path to the YAML file the data was loaded from
    :return: Loaded (and possibly scaled) mesh
    """
    if "filepath" not in data:
        raise KeyError(f"No mesh filepath was provided in the YAML data: {data}")

    mesh = load_trimesh_from_file(yaml_path.parent / Path(data["filepath"]))

    if data.get("scale") is not None:
        mesh.apply_scale(data["scale"])

    return mesh


def compute_aabb(mesh: trimesh.Trimesh) -> AxisAlignedBoundingBox:
    """Compute the axis-aligned bounding box (AABB) of the mesh in its link frame."""
    lower, upper = mesh.bounds
    return AxisAlignedBoundingBox(Point3D.from_array(lower), Point3D.from_array(upper))
