"""Define the builder that constructs validated Cartesian paths for a manipulator."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cartesian_motion.motion_planning.collision_validation import validate_collision_free
from cartesian_motion.motion_planning.config import CartesianPathConfig, ValidationMode
from cartesian_motion.motion_planning.errors import FailureKind, PathConstructionError
from cartesian_motion.motion_planning.interpolation import (
    compute_num_steps,
    interpolate_cartesian_path,
    resolve_target_pose,
)
from cartesian_motion.motion_planning.path import ConfigurationPath, PathStage, PathStatus
from cartesian_motion.motion_planning.refinement import AdaptiveRefiner, RefinementReport

if TYPE_CHECKING:
    from cartesian_motion.kinematics import CollisionChecker, RobotModel, RobotState
    from cartesian_motion.motion_planning.sinks import PathSink
    from cartesian_motion.spatial import Pose3D

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathOutcome:
    """Result of constructing a Cartesian path: either a validated path or the failure."""

    status: PathStatus
    states: tuple[RobotState, ...] | None = None
    failure: PathConstructionError | None = None
    reports: tuple[RefinementReport, ...] = ()
    """Reports of the link refinement passes completed before construction ended."""

    @property
    def succeeded(self) -> bool:
        """Check whether the path was constructed and validated."""
        return self.status.stage == PathStage.VALIDATED

    @property
    def failure_kind(self) -> FailureKind | None:
        """Retrieve the kind of failure that ended construction (None on success)."""
        return None if self.failure is None else self.failure.kind

    def unwrap(self) -> tuple[RobotState, ...]:
        """Return the validated path, or raise the failure that prevented its construction."""
        if self.failure is not None:
            raise self.failure
        if self.states is None:
            raise RuntimeError(f"Path outcome with status {self.status} has no states")
        return self.states


class CartesianPathBuilder:
    """Constructs dense, continuous, collision-free end-effector motions between poses.

    A coarse path is first interpolated over the whole motion. Then, link by link from the
        base outward (skipping the base link), the path is refined so that the link never moves
        more than the critical distance between consecutive states. Collision validation of a
        snapshot of the path runs alongside each link's refinement.
    """

    def __init__(
        self,
        robot_model: RobotModel,
        collision_checker: CollisionChecker,
        config: CartesianPathConfig | None = None,
        sink: PathSink | None = None,
        refiner: AdaptiveRefiner | None = None,
    ) -> None:
        """Initialize the builder with the robot's external collaborators.

        :param robot_model: Model listing the robot's links and their geometry extents
        :param collision_checker: Planning scene used to validate path states
        :param config: Path construction parameters (defaults to CartesianPathConfig())
        :param sink: Optional consumer receiving each validated path
        :param refiner: Optional refiner (defaults to an IK-based AdaptiveRefiner)
        """
        self.robot_model = robot_model
        self.collision_checker = collision_checker
        self.config = config or CartesianPathConfig()
        self.sink = sink
        self.refiner = refiner or AdaptiveRefiner(robot_model, self.config)

    def build(
        self,
        start_state: RobotState,
        goal_pose: Pose3D,
        *,
        global_frame: bool = False,
    ) -> PathOutcome:
        """Construct a validated path moving the end-effector from its start pose to a goal.

        :param start_state: Robot state at the beginning of the motion
        :param goal_pose: End-effector goal pose
        :param global_frame: Whether the goal is global (True) or relative to the start pose
        :return: Outcome holding either the validated states or the failure encountered
        """
        path = ConfigurationPath()
        reports: list[RefinementReport] = []

        try:
            self._build_coarse_path(path, start_state, goal_pose, global_frame)

            for link_index, link_name in enumerate(self.robot_model.link_names):
                if link_index == 0:
                    continue  # Don't process the base link

                path.transition_to(PathStatus(PathStage.REFINING, link_index))
                reports.append(self._process_link(path, link_name))

            if self.config.validate_final_path:
                validate_collision_free(
                    path.snapshot(),
                    self.collision_checker,
                    self.config.planning_group,
                )

        except PathConstructionError as failure:
            path.transition_to(PathStatus(PathStage.FAILED))
            logger.error("Invalid path (%s): %s", failure.kind.value, failure)
            return PathOutcome(path.status, failure=failure, reports=tuple(reports))

        path.transition_to(PathStatus(PathStage.VALIDATED))
        states = path.snapshot()
        logger.info("Validated path of %d states", len(states))

        if self.sink is not None:
            self.sink.publish(states, self.config.end_effector_link)

        return PathOutcome(path.status, states=states, reports=tuple(reports))

    def _build_coarse_path(
        self,
        path: ConfigurationPath,
        start_state: RobotState,
        goal_pose: Pose3D,
        global_frame: bool,
    ) -> None:
        """Interpolate the coarse path spanning the whole motion into the empty path."""
        ee_link = self.config.end_effector_link
        start_pose = start_state.get_link_pose(ee_link)
        target_pose = resolve_target_pose(start_pose, goal_pose, global_frame)

        num_steps = compute_num_steps(
            start_pose.position,
            target_pose.position,
            self.config.interpolation_step_m,
        )
        if num_steps == 0 and not target_pose.approx_equal(start_pose):
            logger.warning(
                "Goal %s is within one interpolation step (%f m) of the start; the path "
                "will end at the start pose",
                target_pose,
                self.config.interpolation_step_m,
            )

        states = interpolate_cartesian_path(
            start_state,
            target_pose,
            num_steps,
            end_effector_link=ee_link,
            planning_group=self.config.planning_group,
            global_frame=True,
            ik_timeout_s=self.config.ik_timeout_s,
        )
        path.extend(states)
        path.transition_to(PathStatus(PathStage.COARSE))
        logger.info("Interpolated coarse path of %d states", len(path))

    def _process_link(self, path: ConfigurationPath, link_name: str) -> RefinementReport:
        """Refine the path for one link while validating a snapshot taken beforehand."""
        snapshot = path.snapshot()
        group = self.config.planning_group

        if self.config.validation_mode == ValidationMode.SEQUENTIAL:
            validate_collision_free(snapshot, self.collision_checker, group)
            report = self.refiner.refine(path, link_name)
        else:
            with ThreadPoolExecutor(max_workers=1, thread_name_prefix="collision-check") as pool:
                validation = pool.submit(
                    validate_collision_free,
                    snapshot,
                    self.collision_checker,
                    group,
                )
                report = self.refiner.refine(path, link_name)
                validation.result()  # Join before the next link is processed

        logger.info(
            "Refined %s: %d states (%d inserted, max %.5f m)",
            link_name,
            report.num_states,
            report.num_inserted,
            report.max_distance_m,
        )
        return report
