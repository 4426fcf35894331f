"""Define the waypoint variants and goal type consumed by the trajectory executor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Generic, Tuple, TypeVar, Union

from arm_trajectory.spatial import Point3D, Pose3D, Quaternion

if TYPE_CHECKING:
    from arm_trajectory.robots.fingers import FingerAngles


@dataclass(frozen=True)
class CartesianWaypoint:
    """A target end-effector pose, optionally expressed in a foreign reference frame."""

    position: Point3D
    orientation: Quaternion
    source_frame: str | None = None
    """Frame in which the pose is expressed (None means it's already in the arm's base frame)."""

    stamp_s: float | None = None
    """Timestamp (seconds) used when looking up the transform (None = latest available)."""

    @classmethod
    def from_pose(cls, pose: Pose3D, stamp_s: float | None = None) -> CartesianWaypoint:
        """Construct a waypoint from a pose, taking the pose's frame as the source frame."""
        return CartesianWaypoint(pose.position, pose.orientation, pose.ref_frame, stamp_s)

    def target_pose(self, default_frame: str) -> Pose3D:
        """Retrieve the waypoint's pose, using the given frame if it has no source frame."""
        ref_frame = default_frame if self.source_frame is None else self.source_frame
        return Pose3D(self.position, self.orientation, ref_frame)

    def with_pose(self, pose: Pose3D) -> CartesianWaypoint:
        """Return a copy of the waypoint re-expressed as the given pose."""
        return replace(
            self,
            position=pose.position,
            orientation=pose.orientation,
            source_frame=pose.ref_frame,
        )


@dataclass(frozen=True)
class JointTrajectoryWaypoint:
    """A target end-effector pose paired with target angles for the gripper's fingers."""

    pose: CartesianWaypoint
    fingers: FingerAngles

    @property
    def source_frame(self) -> str | None:
        """Retrieve the frame in which the waypoint's pose is expressed (None = base frame)."""
        return self.pose.source_frame

    @property
    def stamp_s(self) -> float | None:
        """Retrieve the timestamp (seconds) of the waypoint's pose."""
        return self.pose.stamp_s

    def target_pose(self, default_frame: str) -> Pose3D:
        """Retrieve the waypoint's pose, using the given frame if it has no source frame."""
        return self.pose.target_pose(default_frame)

    def with_pose(self, pose: Pose3D) -> JointTrajectoryWaypoint:
        """Return a copy of the waypoint re-expressed as the given pose (fingers unchanged)."""
        return JointTrajectoryWaypoint(self.pose.with_pose(pose), self.fingers)


Waypoint = Union[CartesianWaypoint, JointTrajectoryWaypoint]
"""Any waypoint the executor can send to an arm controller."""

WaypointT = TypeVar("WaypointT", CartesianWaypoint, JointTrajectoryWaypoint)
"""Type variable for the waypoint variant carried by a goal."""


@dataclass(frozen=True)
class TrajectoryGoal(Generic[WaypointT]):
    """An ordered, immutable sequence of waypoints submitted for execution."""

    waypoints: Tuple[WaypointT, ...]

    def __post_init__(self) -> None:
        """Freeze the waypoint sequence and verify that every waypoint is of one variant."""
        object.__setattr__(self, "waypoints", tuple(self.waypoints))

        kinds = {type(w) for w in self.waypoints}
        unknown = kinds - {CartesianWaypoint, JointTrajectoryWaypoint}
        if unknown:
            raise TypeError(f"Unrecognized waypoint types in goal: {unknown}")
        if len(kinds) > 1:
            raise TypeError("A trajectory goal cannot mix Cartesian and finger-carrying waypoints.")

    def __len__(self) -> int:
        """Retrieve the number of waypoints in the goal."""
        return len(self.waypoints)

    @property
    def carries_fingers(self) -> bool:
        """Check whether the goal's waypoints carry finger angles."""
        return any(isinstance(w, JointTrajectoryWaypoint) for w in self.waypoints)
