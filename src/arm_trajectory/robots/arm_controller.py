"""Define a general-purpose interface for the controller of a robot arm."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arm_trajectory.robots.fingers import FingerAngles
    from arm_trajectory.spatial import Pose3D
    from arm_trajectory.trajectories.waypoints import Waypoint


class ArmFaultedError(RuntimeError):
    """Raised when a faulted or stopped arm is asked to queue motion."""


@dataclass(frozen=True)
class ArmSnapshot:
    """A point-in-time reading of the arm controller's state."""

    is_faulted: bool
    pose: Pose3D
    finger_angles: FingerAngles | None
    queued_count: int
    """Number of queued motions the controller has yet to complete."""

    def __post_init__(self) -> None:
        """Verify that the queued motion count is non-negative."""
        if self.queued_count < 0:
            raise ValueError(f"Queued motion count cannot be negative: {self.queued_count}")


class ArmController(ABC):
    """An interface for the controller owning an arm's motion queue and fault state.

    A single controller may be shared by several goal endpoints; its `lock` must be held by
    whichever endpoint is currently dispatching to or monitoring the arm.
    """

    def __init__(self, name: str) -> None:
        """Initialize the controller with a human-readable name."""
        self.name = name
        self.lock = threading.RLock()

    @abstractmethod
    def is_faulted(self) -> bool:
        """Evaluate whether the arm is currently faulted (e.g., stopped by the hardware)."""
        ...

    @abstractmethod
    def current_pose(self) -> Pose3D:
        """Retrieve the current end-effector pose as reported by the controller."""
        ...

    @abstractmethod
    def current_fingers(self) -> FingerAngles | None:
        """Retrieve the current finger angles (None if the arm has no gripper)."""
        ...

    @abstractmethod
    def queued_count(self) -> int:
        """Retrieve the number of motions remaining in the controller's queue."""
        ...

    @abstractmethod
    def enqueue(self, waypoint: Waypoint, *, reset_queue: bool) -> None:
        """Send a waypoint (expressed in the arm's base frame) to the controller.

        :param waypoint: Target waypoint for the arm
        :param reset_queue: Whether to discard all previously queued motion before queueing
        :raises ArmFaultedError: If the arm is faulted or stopped and cannot accept motion
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Halt the arm and discard its queued motion."""
        ...

    @abstractmethod
    def start(self) -> None:
        """Re-enable the arm so that it accepts new motion."""
        ...

    def snapshot(self) -> ArmSnapshot:
        """Read the controller's current state into a fresh snapshot."""
        return ArmSnapshot(
            is_faulted=self.is_faulted(),
            pose=self.current_pose(),
            finger_angles=self.current_fingers(),
            queued_count=self.queued_count(),
        )
