"""Define scripted stand-ins for the collaborators of a trajectory executor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from arm_trajectory.execution import ControlSignals
from arm_trajectory.robots import ArmController, ArmFaultedError, ArmSnapshot, FingerAngles
from arm_trajectory.spatial import (
    ARM_BASE_FRAME,
    Pose3D,
    StaticFrameTransformer,
    TransformUnavailableError,
)
from arm_trajectory.trajectories import Waypoint

WORLD_FRAME = "world"
"""Root frame of the frame tree used by the tests."""

CAMERA_FRAME = "camera"
"""A frame attached to the world in which some test waypoints are expressed."""

ARM_IN_WORLD = Pose3D.from_xyz_rpy(0.5, -0.2, 0.8, yaw_rad=1.0, ref_frame=WORLD_FRAME)
"""Pose of the arm's base frame relative to the world."""

CAMERA_IN_WORLD = Pose3D.from_xyz_rpy(1.5, 0.0, 1.2, roll_rad=0.3, pitch_rad=-0.4, ref_frame=WORLD_FRAME)
"""Pose of the camera frame relative to the world."""


def make_transformer() -> StaticFrameTransformer:
    """Create a frame tree holding the arm's base frame and a camera below a shared world frame."""
    return StaticFrameTransformer({ARM_BASE_FRAME: ARM_IN_WORLD, CAMERA_FRAME: CAMERA_IN_WORLD})


class FlakyTransformer(StaticFrameTransformer):
    """A static frame transformer whose `transform` fails after a number of successful calls."""

    def __init__(self, successful_calls: int) -> None:
        """Initialize the transformer with the standard test frames."""
        super().__init__({ARM_BASE_FRAME: ARM_IN_WORLD, CAMERA_FRAME: CAMERA_IN_WORLD})
        self.remaining_calls = successful_calls

    def transform(self, pose: Pose3D, target_frame: str, stamp_s: float | None = None) -> Pose3D:
        """Convert the pose into the target frame, unless this transformer has run out of calls."""
        if self.remaining_calls <= 0:
            raise TransformUnavailableError(f"Transform data for '{pose.ref_frame}' went stale.")
        self.remaining_calls -= 1
        return super().transform(pose, target_frame, stamp_s)


@dataclass(frozen=True)
class EnqueueCall:
    """A record of one call to `ArmController.enqueue`."""

    waypoint: Waypoint
    reset_queue: bool


class ScriptedArmController(ArmController):
    """An arm controller whose reported state follows per-read scripts.

    Each script is consumed one value per read and repeats its last value once exhausted.
    Every call that changes the controller's state is recorded.
    """

    def __init__(
        self,
        queued_counts: Sequence[int] = (0,),
        faults: Sequence[bool] = (False,),
        poses: Sequence[Pose3D] = (Pose3D.identity(ARM_BASE_FRAME),),
        fingers: FingerAngles | None = None,
        accepted_enqueues: int | None = None,
    ) -> None:
        """Initialize the controller with scripts for its queue size, fault state, and pose.

        If `accepted_enqueues` is given, every enqueue beyond that many raises ArmFaultedError.
        """
        super().__init__("scripted_arm")
        self._queued_counts = list(queued_counts)
        self._faults = list(faults)
        self._poses = list(poses)
        self._fingers = fingers
        self._accepted_enqueues = accepted_enqueues

        self.enqueue_calls: list[EnqueueCall] = []
        self.calls: list[str] = []
        """Names of the state-changing calls received, in order."""

        self.snapshots: list[ArmSnapshot] = []

    @staticmethod
    def _next(script: list) -> object:
        """Consume the next scripted value, repeating the final value indefinitely."""
        return script.pop(0) if len(script) > 1 else script[0]

    def is_faulted(self) -> bool:
        """Read the next scripted fault state."""
        return bool(self._next(self._faults))

    def current_pose(self) -> Pose3D:
        """Read the next scripted pose."""
        pose = self._next(self._poses)
        assert isinstance(pose, Pose3D)
        return pose

    def current_fingers(self) -> FingerAngles | None:
        """Read the fixed finger angles."""
        return self._fingers

    def queued_count(self) -> int:
        """Read the next scripted queued motion count."""
        return int(self._next(self._queued_counts))  # type: ignore[call-overload]

    def enqueue(self, waypoint: Waypoint, *, reset_queue: bool) -> None:
        """Record the enqueued waypoint, or reject it once the accepted enqueues are used up."""
        if self._accepted_enqueues is not None and len(self.enqueue_calls) >= self._accepted_enqueues:
            raise ArmFaultedError(f"Arm '{self.name}' faulted while queueing motion.")
        self.enqueue_calls.append(EnqueueCall(waypoint, reset_queue))
        self.calls.append("enqueue")

    def stop(self) -> None:
        """Record the stop request."""
        self.calls.append("stop")

    def start(self) -> None:
        """Record the start request."""
        self.calls.append("start")

    def snapshot(self) -> ArmSnapshot:
        """Read and record a fresh snapshot."""
        snapshot = super().snapshot()
        self.snapshots.append(snapshot)
        return snapshot


class ScriptedSignals(ControlSignals):
    """Control signals that become set from a given poll tick onward (ticks start at 1)."""

    def __init__(self, cancel_at_tick: int | None = None, shutdown_at_tick: int | None = None) -> None:
        """Initialize the signals with the ticks at which cancellation and shutdown appear."""
        self.cancel_at_tick = cancel_at_tick
        self.shutdown_at_tick = shutdown_at_tick
        self.spins = 0

    def spin_once(self) -> None:
        """Count the tick whose callbacks are being processed."""
        self.spins += 1

    def cancel_requested(self) -> bool:
        """Check whether the cancellation tick has been reached."""
        return self.cancel_at_tick is not None and self.spins >= self.cancel_at_tick

    def shutdown_requested(self) -> bool:
        """Check whether the shutdown tick has been reached."""
        return self.shutdown_at_tick is not None and self.spins >= self.shutdown_at_tick


class CountingRate:
    """A loop rate that never sleeps but counts how often it was asked to."""

    def __init__(self, loop_hz: float = 10.0) -> None:
        """Initialize the rate with the frequency it was requested at."""
        self.loop_hz = loop_hz
        self.sleeps = 0

    def sleep(self) -> None:
        """Count the sleep request and return immediately."""
        self.sleeps += 1
