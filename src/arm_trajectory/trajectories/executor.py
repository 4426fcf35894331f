"""Define the executor that runs a trajectory goal from validation through completion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Optional

from arm_trajectory.execution import ControlSignals, GoalSignals, LoopRate, Rate
from arm_trajectory.io.logging import log_error, log_info, log_warn
from arm_trajectory.trajectories.config import TrajectoryExecutorConfig
from arm_trajectory.trajectories.dispatcher import WaypointDispatcher
from arm_trajectory.trajectories.monitor import ExecutionMonitor, FeedbackCallback
from arm_trajectory.trajectories.outcome import TrajectoryResult
from arm_trajectory.trajectories.validator import GoalValidator
from arm_trajectory.trajectories.waypoints import WaypointT

if TYPE_CHECKING:
    from arm_trajectory.robots import ArmController
    from arm_trajectory.spatial import FrameTransformer
    from arm_trajectory.trajectories.waypoints import TrajectoryGoal

RateFactory = Callable[[float], Rate]
"""A function constructing a loop timer for the given frequency (Hz)."""


class TrajectoryExecutor(Generic[WaypointT]):
    """Validates, dispatches, and monitors trajectory goals against a (possibly shared) arm."""

    def __init__(
        self,
        arm: ArmController,
        transformer: FrameTransformer,
        config: Optional[TrajectoryExecutorConfig] = None,
        rate_factory: Optional[RateFactory] = None,
    ) -> None:
        """Initialize the executor with its collaborators.

        :param arm: Controller executing the goals; its lock serializes concurrent executors
        :param transformer: Service used to express poses in the arm's base frame
        :param config: Executor configuration (defaults used if None)
        :param rate_factory: Constructs the per-goal polling timer (defaults to LoopRate)
        """
        self.arm = arm
        self.transformer = transformer
        self.config = TrajectoryExecutorConfig() if config is None else config
        self._rate_factory: RateFactory = LoopRate if rate_factory is None else rate_factory

        frame = self.config.canonical_frame
        self.validator = GoalValidator(transformer, frame)
        self.dispatcher: WaypointDispatcher[WaypointT] = WaypointDispatcher(arm, transformer, frame)

    def execute(
        self,
        goal: TrajectoryGoal[WaypointT],
        signals: Optional[ControlSignals] = None,
        publish_feedback: Optional[FeedbackCallback] = None,
    ) -> TrajectoryResult:
        """Execute the given goal to a terminal outcome.

        Goal-level failures are reported in the returned result rather than raised.

        :param goal: Trajectory goal to be executed
        :param signals: Cancellation and shutdown flags (defaults to flags that are never set)
        :param publish_feedback: Optional callback receiving feedback at every poll tick
        :return: Terminal result of the goal
        """
        signals = GoalSignals() if signals is None else signals

        if not self.arm.lock.acquire(blocking=False):
            log_warn(f"[TrajectoryExecutor] Waiting for another goal to release {self.arm.name}...")
            self.arm.lock.acquire()

        try:
            result = self._execute_locked(goal, signals, publish_feedback)
        finally:
            self.arm.lock.release()

        if result.success:
            log_info("[TrajectoryExecutor] Trajectory control complete.")
        else:
            log_error(f"[TrajectoryExecutor] Goal {result.outcome.name}: {result.message}")
        return result

    def _execute_locked(
        self,
        goal: TrajectoryGoal[WaypointT],
        signals: ControlSignals,
        publish_feedback: Optional[FeedbackCallback],
    ) -> TrajectoryResult:
        """Execute the goal while holding the arm's lock."""
        variant = "finger-carrying" if goal.carries_fingers else "Cartesian"
        log_info(f"[TrajectoryExecutor] Received {variant} goal with {len(goal)} waypoint(s).")

        rejection = self.validator.validate(goal, self.arm.snapshot())
        if rejection is not None:
            return rejection

        if len(goal) == 0:
            log_warn("[TrajectoryExecutor] Goal has no waypoints; monitoring the arm as-is.")

        report = self.dispatcher.dispatch(goal)
        if not report.complete:
            assert report.failure is not None
            pose = self.transformer.try_transform(
                self.arm.current_pose(),
                self.config.canonical_frame,
            )
            return TrajectoryResult.aborted(pose, report.failure, report.message, report.sent)

        monitor = ExecutionMonitor(
            self.arm,
            self.transformer,
            signals,
            self.config.canonical_frame,
            publish_feedback,
            waypoints_sent=report.sent,
        )
        return monitor.run(self._rate_factory(self.config.loop_hz))
