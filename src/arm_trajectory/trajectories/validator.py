"""Define the check performed on a trajectory goal before any waypoint is sent."""

from __future__ import annotations

from typing import TYPE_CHECKING

from arm_trajectory.io.logging import log_error
from arm_trajectory.trajectories.outcome import FailureKind, TrajectoryResult

if TYPE_CHECKING:
    from arm_trajectory.robots import ArmSnapshot
    from arm_trajectory.spatial import FrameTransformer
    from arm_trajectory.trajectories.waypoints import TrajectoryGoal


class GoalValidator:
    """Rejects goals that arrive while the arm is faulted."""

    def __init__(self, transformer: FrameTransformer, canonical_frame: str) -> None:
        """Initialize the validator with the frame in which rejections report the arm's pose."""
        self._transformer = transformer
        self._canonical_frame = canonical_frame

    def validate(self, goal: TrajectoryGoal, snapshot: ArmSnapshot) -> TrajectoryResult | None:
        """Decide whether the goal may be dispatched given the arm's current state.

        Empty goals are not rejected here.

        :param goal: Trajectory goal awaiting dispatch
        :param snapshot: Fresh reading of the arm controller's state
        :return: None if the goal may proceed, else an aborted result carrying the arm's pose
        """
        if not snapshot.is_faulted:
            return None

        pose = self._transformer.try_transform(snapshot.pose, self._canonical_frame)
        message = f"Arm is faulted; refusing to start a goal with {len(goal)} waypoint(s)."
        log_error(f"[GoalValidator] {message}")
        return TrajectoryResult.aborted(pose, FailureKind.ARM_FAULTED_BEFORE_START, message)
