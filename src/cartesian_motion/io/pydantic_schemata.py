"""Define Pydantic models validating the YAML files that configure Cartesian motion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing_extensions import Annotated

from cartesian_motion.io.yaml_utils import load_yaml_data

if TYPE_CHECKING:
    from pathlib import Path

PositiveLength = Annotated[float, Field(gt=0, description="Length (meters)")]
"""A strictly positive length in meters."""


class StrictSchema(BaseModel):
    """Base schema rejecting keys it doesn't define, so that typos in YAML files are caught."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Link Geometry Schemata
# =============================================================================


class BoxPrimitiveSchema(StrictSchema):
    """A box given by its side lengths along the link's x, y, and z axes."""

    type: Literal["box"]
    x: PositiveLength
    y: PositiveLength
    z: PositiveLength


class SpherePrimitiveSchema(StrictSchema):
    type: Literal["sphere"]
    radius: PositiveLength


class CylinderPrimitiveSchema(StrictSchema):
    """A cylinder aligned with the link's z-axis."""

    type: Literal["cylinder"]
    height: PositiveLength
    radius: PositiveLength


PrimitiveShapeSchema = Annotated[
    Union[BoxPrimitiveSchema, SpherePrimitiveSchema, CylinderPrimitiveSchema],
    Field(discriminator="type"),
]


class MeshSchema(StrictSchema):
    """A mesh file with an optional scale factor (uniform, or one per axis)."""

    filepath: str = Field(description="Path to the mesh file, relative to the YAML file")
    scale: Union[PositiveLength, Tuple[PositiveLength, PositiveLength, PositiveLength], None] = None


class CollisionModelSchema(StrictSchema):
    """The meshes and primitive shapes approximating one link's geometry."""

    meshes: List[MeshSchema] = Field(default_factory=list)
    primitives: List[PrimitiveShapeSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_not_empty(self) -> CollisionModelSchema:
        """Validate that the link has at least one mesh or primitive."""
        if not self.meshes and not self.primitives:
            raise ValueError("Collision model must have at least one mesh or primitive.")
        return self


class LinkGeometriesSchema(StrictSchema):
    """The links of a manipulator, ordered from the base link outward, and their geometry."""

    links: Dict[str, CollisionModelSchema]

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> LinkGeometriesSchema:
        """Validate a link geometry YAML file.

        :param yaml_path: Path to a YAML file with a top-level `links` mapping
        :return: Validated LinkGeometriesSchema instance
        :raises RuntimeError: If the file's contents don't match the schema
        """
        yaml_data = load_yaml_data(yaml_path)

        try:
            return LinkGeometriesSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err


# =============================================================================
# Cartesian Path Configuration Schema
# =============================================================================


class CartesianPathConfigSchema(StrictSchema):
    """Tunable parameters of Cartesian path construction (unspecified values use defaults)."""

    interpolation_step_m: PositiveLength = 0.01
    critical_distance_m: PositiveLength = 0.005
    max_stall_attempts: int = Field(
        default=10,
        gt=0,
        description="Consecutive non-halving bisections tolerated before a space jump",
    )
    end_effector_link: str = Field(default="link_6", min_length=1)
    planning_group: str = Field(default="manipulator", min_length=1)
    ik_timeout_s: Optional[float] = Field(default=None, gt=0)
    validation_mode: Literal["concurrent", "sequential"] = "concurrent"
    validate_final_path: bool = True

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> CartesianPathConfigSchema:
        """Validate the `cartesian_path` section of a YAML file.

        :param yaml_path: Path to a YAML file with a top-level `cartesian_path` mapping
        :return: Validated CartesianPathConfigSchema instance
        :raises RuntimeError: If the section's contents don't match the schema
        """
        yaml_data = load_yaml_data(yaml_path, required_keys={"cartesian_path"})

        try:
            return CartesianPathConfigSchema.model_validate(yaml_data["cartesian_path"])
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err
