"""Define a class mapping the links of a manipulator to their collision geometry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cartesian_motion.collision_models import CollisionModel
from cartesian_motion.io.pydantic_schemata import LinkGeometriesSchema

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cartesian_motion.geometry import Point3D


class LinkGeometries:
    """An ordered collection of robot links and their collision models."""

    def __init__(self, link_models: dict[str, CollisionModel]) -> None:
        """Initialize the collection from a map of link names to collision models.

        :param link_models: Collision models keyed by link name, ordered from the base outward
        """
        if not link_models:
            raise ValueError("LinkGeometries requires at least one link")

        self._link_models = dict(link_models)

    @property
    def link_names(self) -> Sequence[str]:
        """Retrieve the names of the links, ordered from the base link outward."""
        return list(self._link_models)

    def get_collision_model(self, link_name: str) -> CollisionModel:
        """Retrieve the collision model of the named link."""
        model = self._link_models.get(link_name)
        if model is None:
            raise KeyError(f"Unknown link '{link_name}', expected one of {self.link_names}")
        return model

    def get_link_extents(self, link_name: str) -> Point3D:
        """Retrieve the (x,y,z) bounding-box extents of the named link's geometry."""
        return self.get_collision_model(link_name).extents

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> LinkGeometries:
        """Load link geometries from a YAML file.

        :param yaml_path: Path to a YAML file with a `links` mapping of collision models
        :return: Constructed LinkGeometries instance
        """
        schema = LinkGeometriesSchema.validate_yaml(yaml_path)

        link_models = {
            name: CollisionModel.from_yaml_data(model.model_dump(exclude_none=True), yaml_path)
            for name, model in schema.links.items()
        }
        return LinkGeometries(link_models)
