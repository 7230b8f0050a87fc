"""Unit tests for the sequence of robot states built during Cartesian path construction."""

from __future__ import annotations

import pytest

from cartesian_motion.motion_planning import ConfigurationPath, PathStage, PathStatus

from .fixtures.robot_fixtures import state_at

COARSE = PathStatus(PathStage.COARSE)
VALIDATED = PathStatus(PathStage.VALIDATED)
FAILED = PathStatus(PathStage.FAILED)


def refining(link_index: int) -> PathStatus:
    """Construct the status of a path being refined for the given link."""
    return PathStatus(PathStage.REFINING, link_index)


def test_path_lifecycle_moves_forward() -> None:
    """Verify that a path advances through its lifecycle from empty to validated."""
    # Arrange - A new path, which begins empty
    path = ConfigurationPath()
    assert path.status == PathStatus(PathStage.EMPTY)
    assert len(path) == 0

    # Act - Advance through each stage of construction
    path.extend([state_at(), state_at(x=0.01)])
    path.transition_to(COARSE)
    path.transition_to(refining(1))
    path.transition_to(refining(2))
    path.transition_to(VALIDATED)

    # Assert - Expect the final status to be terminal
    assert path.status == VALIDATED
    assert path.status.is_terminal
    assert str(path.status) == "VALIDATED"


@pytest.mark.parametrize(
    ("current", "new"),
    [
        (COARSE, PathStatus(PathStage.EMPTY)),
        (refining(1), COARSE),
        (refining(2), refining(2)),
        (refining(3), refining(1)),
        (VALIDATED, FAILED),
        (FAILED, refining(1)),
    ],
)
def test_path_lifecycle_never_moves_backward(current: PathStatus, new: PathStatus) -> None:
    """Verify that transitions to an earlier (or repeated) status are rejected."""
    assert not current.can_transition_to(new)


def test_invalid_transition_raises() -> None:
    """Verify that an invalid transition raises and leaves the status unchanged."""
    path = ConfigurationPath()
    path.transition_to(refining(3))

    with pytest.raises(RuntimeError, match="REFINING"):
        path.transition_to(COARSE)

    assert path.status == refining(3)


@pytest.mark.parametrize("current", [PathStatus(PathStage.EMPTY), COARSE, refining(4)])
def test_any_nonterminal_status_may_fail(current: PathStatus) -> None:
    """Verify that a path may fail from any non-terminal status."""
    assert current.can_transition_to(FAILED)


def test_replace_states_keeps_endpoints() -> None:
    """Verify that refined states may only replace the path if its endpoints are kept."""
    # Arrange - A two-state path
    start, end = state_at(), state_at(x=0.01)
    path = ConfigurationPath()
    path.extend([start, end])

    # Act - Replace the path with a refined sequence having an extra midpoint
    path.replace_states([start, state_at(x=0.005), end])

    # Assert - Expect the refined sequence, while new endpoints are rejected
    assert len(path) == 3
    assert path[0] is start
    assert path[-1] is end

    with pytest.raises(ValueError, match="start and end"):
        path.replace_states([start, state_at(x=0.01)])
    with pytest.raises(ValueError, match="empty"):
        path.replace_states([])


def test_snapshot_is_unaffected_by_later_changes() -> None:
    """Verify that a snapshot keeps the states present when it was taken."""
    start, end = state_at(), state_at(x=0.01)
    path = ConfigurationPath()
    path.extend([start, end])

    snapshot = path.snapshot()
    path.replace_states([start, state_at(x=0.005), end])

    assert snapshot == (start, end)
    assert len(path.snapshot()) == 3
