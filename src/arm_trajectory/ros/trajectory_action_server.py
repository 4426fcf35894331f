"""Define ROS action servers that execute arm trajectory goals on a shared arm controller."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

import rospy
from actionlib import SimpleActionServer
from jaco_msgs.msg import ArmPoseTrajectoryAction, ArmTrajectoryAction

from arm_trajectory.execution import ControlSignals
from arm_trajectory.io.logging import log_error, log_info
from arm_trajectory.ros.msg_conversion import (
    fill_feedback_msg,
    fill_result_msg,
    finger_goal_from_msg,
    pose_goal_from_msg,
)
from arm_trajectory.trajectories import ExecutionOutcome, TrajectoryExecutor

if TYPE_CHECKING:
    from arm_trajectory.robots import ArmController
    from arm_trajectory.spatial import FrameTransformer
    from arm_trajectory.trajectories import (
        TrajectoryExecutorConfig,
        TrajectoryFeedback,
        TrajectoryGoal,
    )

GoalConverter = Callable[[Any], "TrajectoryGoal"]
"""A function converting an action goal message into a trajectory goal."""


class RosControlSignals(ControlSignals):
    """Control signals read from an action server's preemption flag and the ROS node's state."""

    def __init__(self, server: SimpleActionServer) -> None:
        """Initialize the signals for goals accepted by the given action server."""
        self._server = server

    def cancel_requested(self) -> bool:
        """Check whether the goal's client has requested preemption."""
        return bool(self._server.is_preempt_requested())

    def shutdown_requested(self) -> bool:
        """Check whether the ROS node is shutting down."""
        return rospy.is_shutdown()


class TrajectoryActionServer:
    """Exposes one trajectory goal variant as a ROS action backed by a trajectory executor."""

    def __init__(
        self,
        action_name: str,
        action_spec: Any,
        goal_converter: GoalConverter,
        executor: TrajectoryExecutor,
    ) -> None:
        """Initialize and start the action server.

        :param action_name: Name of the ROS action (e.g., "arm_pose_trajectory")
        :param action_spec: Generated action type whose feedback and result carry a `pose`
        :param goal_converter: Converts received goal messages into trajectory goals
        :param executor: Executor that runs the converted goals
        """
        self.action_name = action_name
        self._action_spec = action_spec
        self._goal_converter = goal_converter
        self._executor = executor

        self._server = SimpleActionServer(
            action_name,
            action_spec,
            execute_cb=self._execute_callback,
            auto_start=False,
        )
        self._signals = RosControlSignals(self._server)
        self._server.start()
        log_info(f"[TrajectoryActionServer] Started action server '{action_name}'.")

    def _publish_feedback(self, feedback: TrajectoryFeedback) -> None:
        """Publish the given trajectory feedback through the action server."""
        feedback_msg = self._action_spec().action_feedback.feedback
        self._server.publish_feedback(fill_feedback_msg(feedback_msg, feedback))

    def _execute_callback(self, goal_msg: Any) -> None:
        """Execute a received goal and set the action's terminal state from the result."""
        canonical_frame = self._executor.config.canonical_frame
        result_msg = self._action_spec().action_result.result

        try:
            goal = self._goal_converter(goal_msg)
        except (TypeError, ValueError) as err:
            log_error(f"[TrajectoryActionServer] Rejected invalid goal on '{self.action_name}': {err}")
            self._server.set_aborted(result_msg, text=f"Invalid goal: {err}")
            return

        result = self._executor.execute(goal, self._signals, self._publish_feedback)
        fill_result_msg(result_msg, result, canonical_frame)

        if result.outcome is ExecutionOutcome.SUCCEEDED:
            self._server.set_succeeded(result_msg, text=result.message)
        elif result.outcome is ExecutionOutcome.PREEMPTED:
            self._server.set_preempted(result_msg, text=result.message)
        else:
            self._server.set_aborted(result_msg, text=result.message)


def serve_arm_trajectories(
    arm: ArmController,
    transformer: FrameTransformer,
    config: TrajectoryExecutorConfig,
) -> list[TrajectoryActionServer]:
    """Start the Cartesian and finger-carrying trajectory actions over one shared arm.

    Both actions execute through the arm's lock, so at most one goal drives the arm at a time.

    :param arm: Arm controller shared by both actions
    :param transformer: Service used to express poses in the arm's base frame
    :param config: Configuration shared by both actions' executors
    :return: List of the started action servers
    """
    return [
        TrajectoryActionServer(
            "arm_pose_trajectory",
            ArmPoseTrajectoryAction,
            pose_goal_from_msg,
            TrajectoryExecutor(arm, transformer, config, rate_factory=rospy.Rate),
        ),
        TrajectoryActionServer(
            "arm_trajectory",
            ArmTrajectoryAction,
            finger_goal_from_msg,
            TrajectoryExecutor(arm, transformer, config, rate_factory=rospy.Rate),
        ),
    ]
