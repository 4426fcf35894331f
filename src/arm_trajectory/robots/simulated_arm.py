"""Implement a simulated arm controller that works through its motion queue over time."""

from __future__ import annotations

import time
from collections import deque
from typing import TYPE_CHECKING, Callable

from arm_trajectory.io.logging import log_debug, log_warn
from arm_trajectory.robots.arm_controller import ArmController, ArmFaultedError
from arm_trajectory.robots.fingers import FingerAngles, GripperAngleLimits
from arm_trajectory.spatial import (
    ARM_BASE_FRAME,
    Pose3D,
    angle_between_quaternions_deg,
    euclidean_distance_3d_m,
)
from arm_trajectory.trajectories.waypoints import JointTrajectoryWaypoint

if TYPE_CHECKING:
    from arm_trajectory.trajectories.waypoints import Waypoint


class SimulatedArmController(ArmController):
    """An arm controller that reaches each queued waypoint after a fixed motion duration.

    Progress is computed lazily from the clock whenever the controller is read, so the
    simulated arm needs no background thread. Stopping the arm marks it as faulted until
    it is started again, as on the hardware.
    """

    def __init__(
        self,
        name: str = "simulated_arm",
        *,
        base_frame: str = ARM_BASE_FRAME,
        home_pose: Pose3D | None = None,
        finger_limits: GripperAngleLimits | None = None,
        motion_duration_s: float = 0.2,
        fault_after_motions: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the simulated arm at its home pose.

        :param name: Name of the simulated arm
        :param base_frame: Base frame in which the arm reports and accepts poses
        :param home_pose: Initial end-effector pose (defaults to the base frame's origin)
        :param finger_limits: Finger joint limits (if None, the arm has no gripper)
        :param motion_duration_s: Duration (seconds) taken to reach each queued waypoint
        :param fault_after_motions: Number of completed motions after which the arm faults (optional)
        :param clock: Function returning the current time (seconds)
        """
        super().__init__(name)
        if motion_duration_s < 0:
            raise ValueError(f"Motion duration cannot be negative: {motion_duration_s}")

        self.base_frame = base_frame
        self.finger_limits = finger_limits
        self.motion_duration_s = motion_duration_s
        self.fault_after_motions = fault_after_motions
        self._clock = clock

        self._pose = home_pose if home_pose is not None else Pose3D.identity(base_frame)
        if self._pose.ref_frame != base_frame:
            raise ValueError(f"Home pose must be expressed in '{base_frame}'.")

        self._fingers = None if finger_limits is None else FingerAngles.uniform(finger_limits.open_rad)
        self._queue: deque[Waypoint] = deque()
        self._motion_start_s = self._clock()
        self._stopped = False
        self._faulted = False
        self.completed_motions = 0

    def _advance(self) -> None:
        """Complete every queued motion whose duration has elapsed."""
        if self._stopped or self._faulted:
            return

        now_s = self._clock()
        while self._queue and now_s - self._motion_start_s >= self.motion_duration_s:
            self._reach(self._queue.popleft())
            self._motion_start_s += self.motion_duration_s

            if self.fault_after_motions is not None and self.completed_motions >= self.fault_after_motions:
                self.trigger_fault()
                return

    def _reach(self, waypoint: Waypoint) -> None:
        """Place the simulated end-effector (and fingers) at the given waypoint."""
        target = waypoint.target_pose(self.base_frame)
        moved_m = euclidean_distance_3d_m(self._pose, target)
        turned_deg = angle_between_quaternions_deg(self._pose.orientation, target.orientation)
        self._pose = target
        if isinstance(waypoint, JointTrajectoryWaypoint) and self.finger_limits is not None:
            self._fingers = waypoint.fingers.clamped(self.finger_limits)
        self.completed_motions += 1
        log_debug(
            f"[SimulatedArmController] '{self.name}' moved {moved_m:.3f} m and turned "
            f"{turned_deg:.1f} deg to reach {self._pose}.",
        )

    def trigger_fault(self) -> None:
        """Fault the simulated arm, freezing its remaining queued motion."""
        log_warn(f"[SimulatedArmController] '{self.name}' has faulted.")
        self._faulted = True

    def is_faulted(self) -> bool:
        """Evaluate whether the arm is faulted or has been stopped."""
        self._advance()
        return self._faulted or self._stopped

    def current_pose(self) -> Pose3D:
        """Retrieve the pose of the most recently reached waypoint."""
        self._advance()
        return self._pose

    def current_fingers(self) -> FingerAngles | None:
        """Retrieve the current finger angles (None if the arm has no gripper)."""
        self._advance()
        return self._fingers

    def queued_count(self) -> int:
        """Retrieve the number of waypoints the arm has yet to reach."""
        self._advance()
        return len(self._queue)

    def enqueue(self, waypoint: Waypoint, *, reset_queue: bool) -> None:
        """Queue the given waypoint, optionally discarding all previously queued motion.

        :raises ArmFaultedError: If the arm is stopped or faulted
        :raises ValueError: If the waypoint is not expressed in the arm's base frame
        """
        if self.is_faulted():
            raise ArmFaultedError(f"Cannot queue motion on stopped or faulted arm '{self.name}'.")

        if waypoint.source_frame not in (None, self.base_frame):
            raise ValueError(f"Waypoint must be in '{self.base_frame}', not '{waypoint.source_frame}'.")

        if reset_queue or not self._queue:
            self._queue.clear()
            self._motion_start_s = self._clock()
        self._queue.append(waypoint)

    def stop(self) -> None:
        """Halt the arm, discarding its queued motion."""
        self._advance()
        self._queue.clear()
        self._stopped = True

    def start(self) -> None:
        """Re-enable the arm, clearing any fault."""
        self._stopped = False
        self._faulted = False
        self._motion_start_s = self._clock()
