"""Define the state machine that monitors a dispatched trajectory until it terminates."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from arm_trajectory.io.logging import log_error, log_info, log_warn
from arm_trajectory.trajectories.outcome import FailureKind, TrajectoryFeedback, TrajectoryResult

if TYPE_CHECKING:
    from arm_trajectory.execution import ControlSignals, Rate
    from arm_trajectory.robots import ArmController
    from arm_trajectory.spatial import FrameTransformer

FeedbackCallback = Callable[[TrajectoryFeedback], None]
"""A function receiving the feedback published at each poll tick."""


class MonitorState(Enum):
    """States of the execution monitor; all but MONITORING are terminal."""

    MONITORING = "monitoring"
    SUCCEEDED = "succeeded"
    PREEMPTED = "preempted"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        """Check whether the state ends the monitoring of a goal."""
        return self is not MonitorState.MONITORING


class ExecutionMonitor:
    """Polls the arm controller once per tick and decides the terminal outcome of a goal.

    Within each tick, feedback is published after the fault check and before the
    completion check, so no feedback is ever published for a faulted snapshot.
    """

    def __init__(
        self,
        arm: ArmController,
        transformer: FrameTransformer,
        signals: ControlSignals,
        canonical_frame: str,
        publish_feedback: Optional[FeedbackCallback] = None,
        waypoints_sent: int = 0,
    ) -> None:
        """Initialize the monitor in the MONITORING state.

        :param arm: Controller executing the dispatched waypoints
        :param transformer: Service used to express the arm's pose in the canonical frame
        :param signals: Cancellation and shutdown flags polled at every tick
        :param canonical_frame: Frame in which feedback and results are expressed
        :param publish_feedback: Optional callback invoked with each tick's feedback
        :param waypoints_sent: Number of waypoints dispatched before monitoring began
        """
        self._arm = arm
        self._transformer = transformer
        self._signals = signals
        self._canonical_frame = canonical_frame
        self._publish_feedback = publish_feedback
        self._waypoints_sent = waypoints_sent

        self.state = MonitorState.MONITORING
        self.ticks = 0
        self.last_feedback: TrajectoryFeedback | None = None
        self.result: TrajectoryResult | None = None

    def step(self) -> MonitorState:
        """Perform exactly one poll tick and return the monitor's resulting state.

        :return: MONITORING if the goal is still executing, else the terminal state reached
        :raises RuntimeError: If called after the monitor has already terminated
        """
        if self.state.is_terminal:
            raise RuntimeError(f"Cannot step a monitor in terminal state {self.state.name}.")

        self.ticks += 1
        self._signals.spin_once()

        if self._signals.cancel_requested():
            return self._preempt(FailureKind.USER_CANCELLATION)
        if self._signals.shutdown_requested():
            return self._preempt(FailureKind.PROCESS_SHUTDOWN)

        snapshot = self._arm.snapshot()
        if snapshot.is_faulted:
            if self.last_feedback is not None:
                pose = self.last_feedback.pose
            else:
                pose = self._transformer.try_transform(snapshot.pose, self._canonical_frame)
            message = f"Arm faulted during execution at poll tick {self.ticks}."
            log_error(f"[ExecutionMonitor] {message}")
            return self._finish(
                MonitorState.ABORTED,
                TrajectoryResult.aborted(
                    pose,
                    FailureKind.ARM_FAULTED_DURING_EXECUTION,
                    message,
                    self._waypoints_sent,
                    self.ticks,
                ),
            )

        pose = self._transformer.try_transform(snapshot.pose, self._canonical_frame)
        if pose is None:
            message = (
                f"Could not express the arm pose from {snapshot.pose.ref_frame} "
                f"in {self._canonical_frame} at poll tick {self.ticks}."
            )
            log_error(f"[ExecutionMonitor] {message}")
            last_pose = None if self.last_feedback is None else self.last_feedback.pose
            return self._finish(
                MonitorState.ABORTED,
                TrajectoryResult.aborted(
                    last_pose,
                    FailureKind.TRANSFORM_UNAVAILABLE,
                    message,
                    self._waypoints_sent,
                    self.ticks,
                ),
            )

        self.last_feedback = TrajectoryFeedback(pose, self.ticks)
        if self._publish_feedback is not None:
            self._publish_feedback(self.last_feedback)

        if snapshot.queued_count == 0:
            log_info("[ExecutionMonitor] Cartesian control complete.")
            return self._finish(
                MonitorState.SUCCEEDED,
                TrajectoryResult.succeeded(pose, self._waypoints_sent, self.ticks),
            )

        return self.state

    def run(self, rate: Rate) -> TrajectoryResult:
        """Poll the arm at the given rate until the goal reaches a terminal state.

        :param rate: Timer whose `sleep()` separates consecutive ticks
        :return: Terminal result of the monitored goal
        """
        while not self.step().is_terminal:
            rate.sleep()

        assert self.result is not None
        return self.result

    def _preempt(self, failure: FailureKind) -> MonitorState:
        """Stop and restart the arm, then terminate the monitor as preempted."""
        reason = "Cancellation requested" if failure is FailureKind.USER_CANCELLATION else "Shutdown"
        log_warn(f"[ExecutionMonitor] {reason} at poll tick {self.ticks}; stopping the arm.")
        self._arm.stop()
        self._arm.start()

        pose = None if self.last_feedback is None else self.last_feedback.pose
        result = TrajectoryResult.preempted(pose, failure, self._waypoints_sent, self.ticks)
        return self._finish(MonitorState.PREEMPTED, result)

    def _finish(self, state: MonitorState, result: TrajectoryResult) -> MonitorState:
        """Record the terminal state and result of the monitor."""
        self.state = state
        self.result = result
        return state
