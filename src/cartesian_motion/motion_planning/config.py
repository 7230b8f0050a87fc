"""Define the tunable parameters used to construct validated Cartesian paths."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cartesian_motion.io.pydantic_schemata import CartesianPathConfigSchema
from cartesian_motion.io.yaml_utils import export_yaml_data

if TYPE_CHECKING:
    from pathlib import Path


class ValidationMode(Enum):
    """Strategy used to schedule collision validation relative to per-link refinement."""

    CONCURRENT = "concurrent"
    """Validate a snapshot of the path in a worker thread while the link is refined."""

    SEQUENTIAL = "sequential"
    """Validate the path in the calling thread before the link is refined."""


@dataclass(frozen=True)
class CartesianPathConfig:
    """Parameters controlling interpolation, refinement, and validation of Cartesian paths."""

    interpolation_step_m: float = 0.01
    """Straight-line distance (meters) between consecutive states of the coarse path."""

    critical_distance_m: float = 0.005
    """Maximum swept distance (meters) allowed for any link between consecutive states."""

    max_stall_attempts: int = 10
    """Number of consecutive non-halving bisections after which a space jump is declared."""

    end_effector_link: str = "link_6"
    planning_group: str = "manipulator"

    ik_timeout_s: float | None = None
    """Optional limit (seconds) on each inverse kinematics solve (None for no limit)."""

    validation_mode: ValidationMode = ValidationMode.CONCURRENT

    validate_final_path: bool = True
    """Whether states inserted while refining the last link are also collision-checked."""

    def __post_init__(self) -> None:
        """Verify that the configured values are usable."""
        if self.interpolation_step_m <= 0:
            raise ValueError(f"Interpolation step must be positive: {self.interpolation_step_m}")
        if self.critical_distance_m <= 0:
            raise ValueError(f"Critical distance must be positive, got {self.critical_distance_m}")
        if self.max_stall_attempts < 1:
            raise ValueError(f"Stall attempts must be at least 1, got {self.max_stall_attempts}")
        if self.ik_timeout_s is not None and self.ik_timeout_s <= 0:
            raise ValueError(f"IK timeout must be positive, got {self.ik_timeout_s}")
        if not self.end_effector_link or not self.planning_group:
            raise ValueError("End-effector link and planning group names must be non-empty")

    @classmethod
    def from_schema(cls, schema: CartesianPathConfigSchema) -> CartesianPathConfig:
        """Construct a configuration from its validated Pydantic schema."""
        data = schema.model_dump()
        data["validation_mode"] = ValidationMode(data["validation_mode"])
        return CartesianPathConfig(**data)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> CartesianPathConfig:
        """Load a configuration from the `cartesian_path` section of a YAML file.

        :param yaml_path: Path to a YAML file containing a `cartesian_path` mapping
        :return: Constructed CartesianPathConfig (unspecified values take their defaults)
        """
        return CartesianPathConfig.from_schema(CartesianPathConfigSchema.validate_yaml(yaml_path))

    def to_yaml(self, yaml_path: Path) -> None:
        """Export the configuration as the `cartesian_path` section of a YAML file."""
        data = asdict(self)
        data["validation_mode"] = self.validation_mode.value
        export_yaml_data({"cartesian_path": data}, yaml_path)
