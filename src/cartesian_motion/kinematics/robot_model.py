"""Define the interface expected of the kinematic model of a manipulator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cartesian_motion.geometry import Point3D


class RobotModel(Protocol):
    """A manipulator model listing its links and the size of their collision geometry."""

    @property
    def link_names(self) -> Sequence[str]:
        """Retrieve the names of the robot's links, ordered from the base link outward."""
        ...

    def get_link_extents(self, link_name: str) -> Point3D:
        """Retrieve the (x,y,z) bounding-box extents of the named link's geometry."""
        ...
