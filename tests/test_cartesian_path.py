"""Unit tests for constructing validated Cartesian paths from a start state to a goal pose."""

from __future__ import annotations

import logging

import pytest

from cartesian_motion.kinematics import LinkGeometries
from cartesian_motion.motion_planning import (
    AdaptiveRefiner,
    CartesianPathBuilder,
    CartesianPathConfig,
    CollisionDetectedError,
    FailureKind,
    IkFailureError,
    PathStage,
    PathStatus,
    SpaceJumpError,
    ValidationMode,
    compute_swept_distance,
)
from cartesian_motion.spatial import Pose3D

from .fixtures.robot_fixtures import (
    END_EFFECTOR,
    LINK_NAMES,
    PLANNING_GROUP,
    RecordingPathSink,
    StubCollisionChecker,
    StubRobotState,
    state_at,
)

RELATIVE_GOAL = Pose3D.from_xyz_rpy(-0.4, 0.0, -0.5)
"""Goal 0.64 m from the start, spanning 64 whole interpolation steps of 1 cm."""


def ee_xyz(state: StubRobotState) -> tuple[float, float, float]:
    """Retrieve the end-effector position of the given state."""
    return state.get_link_pose(END_EFFECTOR).position.to_tuple()


def test_coarse_path_spans_whole_steps(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that the coarse path has one state per whole interpolation step plus the start."""
    # Arrange - A critical distance large enough that refinement inserts nothing
    config = CartesianPathConfig(critical_distance_m=0.02)
    builder = CartesianPathBuilder(link_geometries, free_space, config)

    # Act - Build a path toward a goal expressed relative to the start pose
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Expect floor(0.6403 / 0.01) = 64 steps, ending exactly at the goal
    states = outcome.unwrap()
    assert outcome.succeeded
    assert len(states) == 65
    assert states[0] is start_state
    assert ee_xyz(states[-1]) == pytest.approx((-0.4, 0.0, -0.5))
    assert all(report.num_inserted == 0 for report in outcome.reports)


def test_default_build_bounds_every_link(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that refinement with default parameters bounds each link's motion by 5 mm."""
    # Arrange - Default parameters (1 cm steps, 5 mm critical distance)
    builder = CartesianPathBuilder(link_geometries, free_space)

    # Act - Build the path
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Each ~1.0005 cm coarse segment is split into four by the first link's pass
    states = outcome.unwrap()
    assert outcome.status == PathStatus(PathStage.VALIDATED)
    assert len(states) == 4 * 64 + 1
    assert [report.link_name for report in outcome.reports] == LINK_NAMES[1:]
    assert outcome.reports[0].num_inserted == 3 * 64
    assert all(report.num_inserted == 0 for report in outcome.reports[1:])

    for link_name in LINK_NAMES[1:]:
        extents = link_geometries.get_link_extents(link_name)
        for state, next_state in zip(states, states[1:]):
            assert compute_swept_distance(state, next_state, link_name, extents) <= 0.005


def test_global_goal_is_not_composed_with_start(
    link_geometries: LinkGeometries,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that a goal given in the global frame is reached as-is."""
    # Arrange - A start state away from the origin
    start_state = state_at(x=0.1)
    config = CartesianPathConfig(critical_distance_m=0.02)
    builder = CartesianPathBuilder(link_geometries, free_space, config)

    # Act - Build toward a global goal 30 cm above the start
    outcome = builder.build(start_state, Pose3D.from_xyz_rpy(0.1, 0.0, 0.3), global_frame=True)

    # Assert - Expect 30 steps ending at the global goal
    states = outcome.unwrap()
    assert len(states) == 31
    assert ee_xyz(states[-1]) == pytest.approx((0.1, 0.0, 0.3))


def test_goal_at_start_yields_single_state_path(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that a goal closer than one interpolation step yields only the start state."""
    builder = CartesianPathBuilder(link_geometries, free_space)

    with caplog.at_level(logging.WARNING, logger="cartesian_motion"):
        outcome = builder.build(start_state, Pose3D.from_xyz_rpy(0.004, 0.0, 0.0))

    assert outcome.unwrap() == (start_state,)
    assert start_state.call_log.num_calls == 0
    assert any("within one interpolation step" in r.getMessage() for r in caplog.records)


def test_goal_equal_to_start_logs_no_warning(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that a goal coinciding with the start isn't reported as unreached."""
    builder = CartesianPathBuilder(link_geometries, free_space)

    with caplog.at_level(logging.WARNING, logger="cartesian_motion"):
        outcome = builder.build(start_state, Pose3D.identity())

    assert outcome.unwrap() == (start_state,)
    assert not any("interpolation step" in r.getMessage() for r in caplog.records)


def test_fine_critical_distance_refines_straight_motion(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that a straight translation refined past the stall limit remains valid."""
    # Arrange - A 1.5 cm goal whose single coarse segment needs 11 consecutive halvings
    config = CartesianPathConfig(critical_distance_m=1e-5)
    builder = CartesianPathBuilder(link_geometries, free_space, config)

    # Act - Build the straight-line path
    outcome = builder.build(start_state, Pose3D.from_xyz_rpy(0.015, 0.0, 0.0))

    # Assert - Expect 2**11 evenly spaced segments ending at the goal
    states = outcome.unwrap()
    assert outcome.succeeded
    assert len(states) == 2**11 + 1
    assert ee_xyz(states[-1]) == pytest.approx((0.015, 0.0, 0.0))
    for state, next_state in zip(states, states[1:]):
        assert next_state.ee_pose.position.x - state.ee_pose.position.x <= 1e-5


def test_collision_fails_path(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
) -> None:
    """Verify that a colliding state ends construction with a collision failure."""
    # Arrange - States with their end-effector below z = -0.25 are in collision
    checker = StubCollisionChecker(lambda state: state.ee_pose.position.z < -0.25)
    builder = CartesianPathBuilder(link_geometries, checker)

    # Act - Build the path
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Expect the first coarse state below z = -0.25 (z = -0.5 * 33/64) to be reported
    assert not outcome.succeeded
    assert outcome.status == PathStatus(PathStage.FAILED)
    assert outcome.failure_kind == FailureKind.COLLISION
    assert outcome.states is None
    assert isinstance(outcome.failure, CollisionDetectedError)
    assert outcome.failure.state_index == 33
    assert outcome.reports == ()

    with pytest.raises(CollisionDetectedError):
        outcome.unwrap()


def test_ik_failure_fails_path(
    link_geometries: LinkGeometries,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that an unreachable interpolated pose ends construction with an IK failure."""
    # Arrange - Poses with x below -0.2 are unreachable
    start_state = state_at(is_reachable=lambda pose: pose.position.x >= -0.2)
    builder = CartesianPathBuilder(link_geometries, free_space)

    # Act - Build the path
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Expect failure at step 33 (x = -0.4 * 33/64), before any validation
    assert outcome.status == PathStatus(PathStage.FAILED)
    assert outcome.failure_kind == FailureKind.IK_FAILURE
    assert isinstance(outcome.failure, IkFailureError)
    assert outcome.failure.step_index == 33
    assert free_space.checked_states == []


def test_space_jump_stops_further_links(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that a space jump while refining one link leaves later links unprocessed."""
    # Arrange - A refiner for which no segment midpoint can be solved
    config = CartesianPathConfig()
    refiner = AdaptiveRefiner(link_geometries, config, midpoint_solver=lambda _a, _b: None)
    builder = CartesianPathBuilder(link_geometries, free_space, config, refiner=refiner)

    # Act - Build the path (every coarse segment exceeds the critical distance)
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Expect the first link to fail, with only its coarse snapshot validated
    assert outcome.failure_kind == FailureKind.SPACE_JUMP
    assert isinstance(outcome.failure, SpaceJumpError)
    assert outcome.failure.link_name == LINK_NAMES[1]
    assert outcome.failure.segment_index == 0
    assert outcome.failure.caused_by_ik_failure
    assert len(free_space.checked_states) == 65


def test_sequential_validation_matches_concurrent(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
) -> None:
    """Verify that both validation modes produce the same path."""
    # Arrange - Identical builders differing only in their validation mode
    concurrent_checker = StubCollisionChecker()
    sequential_checker = StubCollisionChecker()
    sequential_config = CartesianPathConfig(validation_mode=ValidationMode.SEQUENTIAL)
    concurrent_builder = CartesianPathBuilder(link_geometries, concurrent_checker)
    sequential_builder = CartesianPathBuilder(
        link_geometries,
        sequential_checker,
        sequential_config,
    )

    # Act - Build the same path with each builder
    concurrent_states = concurrent_builder.build(start_state, RELATIVE_GOAL).unwrap()
    sequential_states = sequential_builder.build(start_state, RELATIVE_GOAL).unwrap()

    # Assert - Expect equal paths, with sequential checks made only by the calling thread
    assert concurrent_states == sequential_states
    assert concurrent_checker.checked_states == sequential_checker.checked_states
    assert len(sequential_checker.thread_names) == 1
    assert not any(n.startswith("collision-check") for n in sequential_checker.thread_names)


def test_concurrent_validation_runs_in_worker_thread(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
) -> None:
    """Verify that per-link validation runs in a dedicated worker thread."""
    # Arrange - Disable the final validation, which runs in the calling thread
    checker = StubCollisionChecker()
    config = CartesianPathConfig(validate_final_path=False)
    builder = CartesianPathBuilder(link_geometries, checker, config)

    # Act - Build the path
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Expect every check to come from a worker, for the configured planning group
    assert outcome.succeeded
    assert checker.thread_names
    assert all(name.startswith("collision-check") for name in checker.thread_names)
    assert checker.checked_groups == {PLANNING_GROUP}

    # The first link validates the 65-state coarse path; the others validate the refined path
    assert len(checker.checked_states) == 65 + 5 * 257


def test_final_validation_checks_refined_path(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
) -> None:
    """Verify that the final validation pass checks every state of the finished path."""
    # Arrange - States strictly between two coarse states collide
    def between_coarse_states(state: StubRobotState) -> bool:
        steps = state.ee_pose.position.z / (-0.5 / 64)
        return abs(steps - round(steps)) > 1e-6

    checker = StubCollisionChecker(between_coarse_states)
    config = CartesianPathConfig(validation_mode=ValidationMode.SEQUENTIAL)
    links_1_2 = LinkGeometries(
        {name: link_geometries.get_collision_model(name) for name in LINK_NAMES[:2]},
    )
    builder = CartesianPathBuilder(links_1_2, checker, config)

    # Act - Build the path, refining only a single link
    outcome = builder.build(start_state, RELATIVE_GOAL)

    # Assert - Expect only the final pass to see the first inserted state
    assert outcome.failure_kind == FailureKind.COLLISION
    assert isinstance(outcome.failure, CollisionDetectedError)
    assert outcome.failure.state_index == 1


def test_sink_receives_validated_path(
    link_geometries: LinkGeometries,
    start_state: StubRobotState,
    free_space: StubCollisionChecker,
) -> None:
    """Verify that each validated path is published to the sink, and failures are not."""
    # Arrange - A recording sink attached to the builder
    sink = RecordingPathSink()
    config = CartesianPathConfig(critical_distance_m=0.02)
    builder = CartesianPathBuilder(link_geometries, free_space, config, sink=sink)

    # Act - Build one valid path and one path that fails IK
    states = builder.build(start_state, RELATIVE_GOAL).unwrap()
    unreachable_start = state_at(is_reachable=lambda _: False)
    failed = builder.build(unreachable_start, RELATIVE_GOAL)

    # Assert - Expect only the validated path to be published
    assert not failed.succeeded
    assert sink.published == [(states, END_EFFECTOR)]
