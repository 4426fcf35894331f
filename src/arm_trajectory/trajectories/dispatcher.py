"""Define a class that sends a goal's waypoints, in order, to the arm controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic

from arm_trajectory.io.logging import log_debug, log_error
from arm_trajectory.robots.arm_controller import ArmFaultedError
from arm_trajectory.spatial import TransformUnavailableError
from arm_trajectory.trajectories.outcome import FailureKind
from arm_trajectory.trajectories.waypoints import WaypointT

if TYPE_CHECKING:
    from arm_trajectory.robots import ArmController
    from arm_trajectory.spatial import FrameTransformer
    from arm_trajectory.trajectories.waypoints import TrajectoryGoal


@dataclass(frozen=True)
class DispatchReport:
    """Summarizes how many of a goal's waypoints were sent and why dispatch stopped early."""

    sent: int
    failure: FailureKind | None = None
    message: str = ""

    @property
    def complete(self) -> bool:
        """Check whether every waypoint in the goal was sent."""
        return self.failure is None


class WaypointDispatcher(Generic[WaypointT]):
    """Transforms each waypoint into the arm's base frame and queues it on the controller."""

    def __init__(
        self,
        arm: ArmController,
        transformer: FrameTransformer,
        canonical_frame: str,
    ) -> None:
        """Initialize the dispatcher with its collaborators.

        :param arm: Controller on which waypoints are queued
        :param transformer: Service used to re-express waypoints in the canonical frame
        :param canonical_frame: Base frame of the arm
        """
        self._arm = arm
        self._transformer = transformer
        self._canonical_frame = canonical_frame

    def to_canonical(self, waypoint: WaypointT) -> WaypointT:
        """Re-express the given waypoint in the arm's base frame.

        :param waypoint: Waypoint to be converted (returned as-is if it has no source frame)
        :return: Equivalent waypoint expressed in the canonical frame
        :raises TransformUnavailableError: If the waypoint's frame can't be transformed
        """
        source_frame = waypoint.source_frame
        if source_frame is None:
            return waypoint

        if not self._transformer.can_transform(self._canonical_frame, source_frame, waypoint.stamp_s):
            raise TransformUnavailableError(
                f"Could not get transform from {self._canonical_frame} to {source_frame}",
            )

        target_pose = waypoint.target_pose(self._canonical_frame)
        canonical_pose = self._transformer.transform(
            target_pose,
            self._canonical_frame,
            waypoint.stamp_s,
        )
        return waypoint.with_pose(canonical_pose)

    def dispatch(self, goal: TrajectoryGoal[WaypointT]) -> DispatchReport:
        """Send the goal's waypoints to the arm, stopping at the first one that can't be sent.

        The first waypoint resets the controller's queue; the rest are appended to it.

        :param goal: Trajectory goal whose waypoints are sent in order
        :return: Report of the number of waypoints sent and any failure
        """
        for idx, waypoint in enumerate(goal.waypoints):
            try:
                canonical = self.to_canonical(waypoint)
            except TransformUnavailableError as t_err:
                message = f"{t_err}, aborting at waypoint {idx + 1}/{len(goal)}."
                log_error(f"[WaypointDispatcher] {message}")
                return DispatchReport(idx, FailureKind.TRANSFORM_UNAVAILABLE, message)

            try:
                self._arm.enqueue(canonical, reset_queue=(idx == 0))
            except ArmFaultedError as f_err:
                message = f"{f_err} Aborting at waypoint {idx + 1}/{len(goal)}."
                log_error(f"[WaypointDispatcher] {message}")
                return DispatchReport(idx, FailureKind.ARM_FAULTED_DURING_EXECUTION, message)

            log_debug(f"[WaypointDispatcher] Queued waypoint {idx + 1}/{len(goal)}.")

        return DispatchReport(len(goal))
