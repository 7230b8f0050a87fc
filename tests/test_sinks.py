"""Unit tests for consumers of finished Cartesian paths."""

from __future__ import annotations

import pytest
from rich.console import Console

from cartesian_motion.motion_planning import ConsolePathSink

from .fixtures.robot_fixtures import END_EFFECTOR, state_at


def test_console_sink_renders_evenly_spaced_waypoints() -> None:
    """Verify that long paths are displayed by evenly spaced waypoints including both ends."""
    # Arrange - A recording console and a 101-state path along the x-axis
    output = Console(record=True, width=120)
    sink = ConsolePathSink(output, max_rows=5)
    states = [state_at(x=0.001 * i) for i in range(101)]

    # Act - Publish the path
    sink.publish(states, END_EFFECTOR)

    # Assert - Expect a titled table with rows at states 0, 25, 50, 75, and 100
    text = output.export_text()
    assert f"{END_EFFECTOR} path (101 states)" in text
    assert sink._select_indices(len(states)) == [0, 25, 50, 75, 100]
    assert "0.0750" in text
    assert "0.1000" in text


def test_console_sink_shows_short_paths_entirely() -> None:
    """Verify that paths no longer than the row limit are displayed in full."""
    sink = ConsolePathSink(Console(record=True), max_rows=5)

    assert sink._select_indices(3) == [0, 1, 2]


def test_console_sink_requires_two_rows() -> None:
    """Verify that a sink unable to show both path endpoints is rejected."""
    with pytest.raises(ValueError, match="two rows"):
        ConsolePathSink(max_rows=1)
