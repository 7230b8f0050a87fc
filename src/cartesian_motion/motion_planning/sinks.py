"""Define consumers receiving finished Cartesian paths (e.g., for display)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from rich.table import Table

from cartesian_motion.io.logging import console

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from cartesian_motion.kinematics import RobotState
    from cartesian_motion.spatial import Pose3D


class PathSink(Protocol):
    """Protocol for consumers of finished paths; sinks never feed back into path construction."""

    def publish(self, states: Sequence[RobotState], end_effector_link: str) -> None:
        """Receive a finished path of robot states."""
        ...


def end_effector_waypoints(states: Sequence[RobotState], end_effector_link: str) -> list[Pose3D]:
    """Compute the end-effector pose at each state along a path."""
    return [state.get_link_pose(end_effector_link) for state in states]


class ConsolePathSink:
    """Renders the end-effector waypoints of finished paths as a table on the console."""

    def __init__(self, output_console: Console | None = None, max_rows: int = 20) -> None:
        """Initialize the sink.

        :param output_console: Console used for rendering (defaults to the package console)
        :param max_rows: Maximum number of evenly spaced waypoints displayed per path
        """
        if max_rows < 2:
            raise ValueError(f"At least two rows are needed to display a path, got {max_rows}")

        self.console = output_console or console
        self.max_rows = max_rows

    def _select_indices(self, num_states: int) -> list[int]:
        """Select evenly spaced state indices, always including the first and last states."""
        if num_states <= self.max_rows:
            return list(range(num_states))

        stride = (num_states - 1) / (self.max_rows - 1)
        return sorted({round(i * stride) for i in range(self.max_rows)})

    def publish(self, states: Sequence[RobotState], end_effector_link: str) -> None:
        """Render the end-effector waypoints of the given path."""
        waypoints = end_effector_waypoints(states, end_effector_link)

        table = Table(title=f"{end_effector_link} path ({len(states)} states)")
        for column in ("#", "x", "y", "z", "roll", "pitch", "yaw"):
            table.add_column(column, justify="right")

        for index in self._select_indices(len(waypoints)):
            values = waypoints[index].to_xyz_rpy()
            table.add_row(str(index), *(f"{value:.4f}" for value in values))

        self.console.print(table)
