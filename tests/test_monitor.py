"""Unit tests for the state machine monitoring a dispatched trajectory."""

from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import given

from arm_trajectory.spatial import ARM_BASE_FRAME, FrameTransformer, Pose3D
from arm_trajectory.trajectories import (
    ExecutionMonitor,
    ExecutionOutcome,
    FailureKind,
    MonitorState,
    TrajectoryFeedback,
)

from .fakes import (
    WORLD_FRAME,
    CountingRate,
    FlakyTransformer,
    ScriptedArmController,
    ScriptedSignals,
    make_transformer,
)


def world_poses(count: int) -> list[Pose3D]:
    """Create a sequence of distinct arm poses reported in the world frame."""
    return [
        Pose3D.from_xyz_rpy(0.1 * i, 0.05, 1.0, yaw_rad=0.1 * i, ref_frame=WORLD_FRAME)
        for i in range(count)
    ]


def make_monitor(
    arm: ScriptedArmController,
    signals: ScriptedSignals | None = None,
    transformer: FrameTransformer | None = None,
) -> tuple[ExecutionMonitor, list[TrajectoryFeedback]]:
    """Create a monitor over the given arm that records its published feedback."""
    feedback: list[TrajectoryFeedback] = []
    monitor = ExecutionMonitor(
        arm,
        make_transformer() if transformer is None else transformer,
        ScriptedSignals() if signals is None else signals,
        ARM_BASE_FRAME,
        publish_feedback=feedback.append,
        waypoints_sent=3,
    )
    return monitor, feedback


@given(st.integers(min_value=1, max_value=20))
def test_monitor_succeeds_once_queue_is_empty(remaining: int) -> None:
    """Verify that the monitor succeeds on the first tick that reads an empty queue."""
    # Arrange - Script a queue that empties by one motion per tick
    counts = list(range(remaining, -1, -1))
    arm = ScriptedArmController(queued_counts=counts, poses=world_poses(len(counts)))
    monitor, feedback = make_monitor(arm)
    rate = CountingRate()

    # Act - Run the monitor to completion
    result = monitor.run(rate)

    # Assert - Expect success after one tick per scripted count, sleeping only between ticks
    assert result.outcome is ExecutionOutcome.SUCCEEDED
    assert monitor.state is MonitorState.SUCCEEDED
    assert result.ticks == len(counts)
    assert rate.sleeps == len(counts) - 1
    assert [fb.tick for fb in feedback] == list(range(1, len(counts) + 1))
    assert result.pose == feedback[-1].pose
    assert result.waypoints_sent == 3
    assert arm.calls == []


def test_feedback_is_arm_pose_in_canonical_frame() -> None:
    """Verify that each tick's feedback is that tick's arm pose expressed in the canonical frame."""
    # Arrange - Script a few poses in the world frame
    poses = world_poses(3)
    arm = ScriptedArmController(queued_counts=[2, 1, 0], poses=poses)
    monitor, feedback = make_monitor(arm)
    transformer = make_transformer()

    # Act - Run the monitor to completion
    monitor.run(CountingRate())

    # Assert - Expect the feedback to match the snapshots taken at each tick
    assert len(feedback) == len(arm.snapshots) == 3
    for fb, snapshot in zip(feedback, arm.snapshots):
        assert fb.pose.ref_frame == ARM_BASE_FRAME
        assert fb.pose.approx_equal(transformer.transform(snapshot.pose, ARM_BASE_FRAME))


def test_step_performs_exactly_one_tick() -> None:
    """Verify that each step polls the arm once and reports whether monitoring continues."""
    # Arrange - Script a queue that empties on the third poll
    arm = ScriptedArmController(queued_counts=[2, 1, 0])
    monitor, feedback = make_monitor(arm)

    # Act/Assert - Expect two non-terminal steps, then success
    assert monitor.step() is MonitorState.MONITORING
    assert monitor.step() is MonitorState.MONITORING
    assert len(feedback) == 2
    assert monitor.step() is MonitorState.SUCCEEDED
    assert monitor.ticks == 3
    assert monitor.result is not None

    # A terminated monitor can't be stepped again
    with pytest.raises(RuntimeError):
        monitor.step()


@given(st.integers(min_value=1, max_value=10))
def test_cancellation_stops_and_restarts_arm(cancel_tick: int) -> None:
    """Verify that cancellation at any tick stops then restarts the arm once and preempts the goal."""
    # Arrange - Script an arm that never finishes and a cancellation at the given tick
    arm = ScriptedArmController(queued_counts=[5])
    monitor, feedback = make_monitor(arm, ScriptedSignals(cancel_at_tick=cancel_tick))

    # Act - Run the monitor
    result = monitor.run(CountingRate())

    # Assert - Expect exactly one stop followed by one start, and no feedback on the final tick
    assert result.outcome is ExecutionOutcome.PREEMPTED
    assert result.failure is FailureKind.USER_CANCELLATION
    assert arm.calls == ["stop", "start"]
    assert result.ticks == cancel_tick
    assert len(feedback) == cancel_tick - 1
    if feedback:
        assert result.pose == feedback[-1].pose
    else:
        assert result.pose is None


def test_shutdown_is_handled_like_cancellation() -> None:
    """Verify that process shutdown stops and restarts the arm and preempts the goal."""
    # Arrange - Script an arm that never finishes and a shutdown on the second tick
    arm = ScriptedArmController(queued_counts=[5])
    monitor, _ = make_monitor(arm, ScriptedSignals(shutdown_at_tick=2))

    # Act - Run the monitor
    result = monitor.run(CountingRate())

    # Assert - Expect preemption attributed to the shutdown
    assert result.outcome is ExecutionOutcome.PREEMPTED
    assert result.failure is FailureKind.PROCESS_SHUTDOWN
    assert arm.calls == ["stop", "start"]


def test_cancellation_takes_priority_over_completion() -> None:
    """Verify that a cancellation observed on a tick preempts the goal even if the queue is empty."""
    arm = ScriptedArmController(queued_counts=[0])
    monitor, feedback = make_monitor(arm, ScriptedSignals(cancel_at_tick=1))

    result = monitor.run(CountingRate())

    assert result.outcome is ExecutionOutcome.PREEMPTED
    assert feedback == []
    assert arm.snapshots == []


def test_fault_during_execution_aborts_with_last_feedback() -> None:
    """Verify that a mid-run fault aborts with the last published pose and leaves the arm as-is."""
    # Arrange - Script an arm that faults on the third poll
    arm = ScriptedArmController(
        queued_counts=[3, 2, 1],
        faults=[False, False, True],
        poses=world_poses(3),
    )
    monitor, feedback = make_monitor(arm)

    # Act - Run the monitor
    result = monitor.run(CountingRate())

    # Assert - Expect an abort with no feedback for the faulted tick and no stop/start calls
    assert result.outcome is ExecutionOutcome.ABORTED
    assert result.failure is FailureKind.ARM_FAULTED_DURING_EXECUTION
    assert len(feedback) == 2
    assert result.pose == feedback[-1].pose
    assert result.ticks == 3
    assert arm.calls == []


def test_fault_on_first_tick_reports_transformed_pose() -> None:
    """Verify that a fault on the first tick aborts with the faulted snapshot's pose in the canonical frame."""
    # Arrange - Script an arm that is faulted from the first poll
    arm = ScriptedArmController(queued_counts=[3], faults=[True], poses=world_poses(1))
    monitor, feedback = make_monitor(arm)

    # Act - Run the monitor
    result = monitor.run(CountingRate())

    # Assert - Expect no feedback and the snapshot's pose expressed in the canonical frame
    expected = make_transformer().transform(arm.snapshots[0].pose, ARM_BASE_FRAME)
    assert result.outcome is ExecutionOutcome.ABORTED
    assert feedback == []
    assert result.pose is not None
    assert result.pose.approx_equal(expected)


def test_feedback_transform_failure_aborts() -> None:
    """Verify that losing the transform for the arm's pose mid-run aborts the goal."""
    # Arrange - Use a transformer that succeeds only twice
    arm = ScriptedArmController(queued_counts=[3], poses=world_poses(4))
    monitor, feedback = make_monitor(arm, transformer=FlakyTransformer(successful_calls=2))

    # Act - Run the monitor
    result = monitor.run(CountingRate())

    # Assert - Expect an abort after two published feedback poses
    assert result.outcome is ExecutionOutcome.ABORTED
    assert result.failure is FailureKind.TRANSFORM_UNAVAILABLE
    assert len(feedback) == 2
    assert result.pose == feedback[-1].pose
    assert arm.calls == []
