"""Define the feedback and terminal results reported for an executed trajectory goal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arm_trajectory.spatial import Pose3D


class ExecutionOutcome(Enum):
    """Terminal classification of a trajectory goal."""

    SUCCEEDED = "succeeded"
    PREEMPTED = "preempted"
    ABORTED = "aborted"


class FailureKind(Enum):
    """Reasons for which a trajectory goal can end without succeeding."""

    ARM_FAULTED_BEFORE_START = "arm_faulted_before_start"
    """The arm was faulted when the goal arrived; no waypoints were sent."""

    ARM_FAULTED_DURING_EXECUTION = "arm_faulted_during_execution"
    """The arm faulted while executing; the controller is left as-is."""

    TRANSFORM_UNAVAILABLE = "transform_unavailable"
    """A waypoint or the arm's pose couldn't be expressed in the arm's base frame."""

    USER_CANCELLATION = "user_cancellation"
    """The goal's issuer requested cancellation; the controller was stopped and restarted."""

    PROCESS_SHUTDOWN = "process_shutdown"
    """The surrounding process began shutting down; handled like a cancellation."""


@dataclass(frozen=True)
class TrajectoryFeedback:
    """The arm's pose (in its base frame) published at one poll tick."""

    pose: Pose3D
    tick: int
    """Index (starting from 1) of the poll tick at which the feedback was published."""


@dataclass(frozen=True)
class TrajectoryResult:
    """The terminal outcome of a trajectory goal along with the arm's final pose."""

    outcome: ExecutionOutcome
    pose: Pose3D | None
    """Final arm pose in the base frame (None if no pose could be expressed in that frame)."""

    message: str
    failure: FailureKind | None = None
    waypoints_sent: int = 0
    ticks: int = 0
    """Number of poll ticks run while monitoring the goal."""

    @property
    def success(self) -> bool:
        """Check whether the goal succeeded."""
        return self.outcome is ExecutionOutcome.SUCCEEDED

    @classmethod
    def succeeded(cls, pose: Pose3D, waypoints_sent: int, ticks: int) -> TrajectoryResult:
        """Construct the result of a goal whose waypoints were all completed."""
        message = f"Completed {waypoints_sent} waypoint(s) after {ticks} poll tick(s)."
        return cls(ExecutionOutcome.SUCCEEDED, pose, message, None, waypoints_sent, ticks)

    @classmethod
    def preempted(
        cls,
        pose: Pose3D | None,
        failure: FailureKind,
        waypoints_sent: int,
        ticks: int,
    ) -> TrajectoryResult:
        """Construct the result of a goal stopped by cancellation or process shutdown."""
        reason = "cancellation" if failure is FailureKind.USER_CANCELLATION else "shutdown"
        message = f"Preempted by {reason} at poll tick {ticks}."
        return cls(ExecutionOutcome.PREEMPTED, pose, message, failure, waypoints_sent, ticks)

    @classmethod
    def aborted(
        cls,
        pose: Pose3D | None,
        failure: FailureKind,
        message: str,
        waypoints_sent: int = 0,
        ticks: int = 0,
    ) -> TrajectoryResult:
        """Construct the result of a goal aborted due to the given failure."""
        return cls(ExecutionOutcome.ABORTED, pose, message, failure, waypoints_sent, ticks)
