"""Define functions to load trajectory goals (and the frames they refer to) from YAML."""

from __future__ import annotations

from typing import TYPE_CHECKING

from arm_trajectory.io.pydantic_schemata import TrajectoryGoalSchema, WaypointDictSchema
from arm_trajectory.robots.fingers import FingerAngles
from arm_trajectory.spatial import Pose3D
from arm_trajectory.trajectories.waypoints import (
    CartesianWaypoint,
    JointTrajectoryWaypoint,
    TrajectoryGoal,
    Waypoint,
)

if TYPE_CHECKING:
    from pathlib import Path

    from arm_trajectory.io.pydantic_schemata import WaypointSchema


def waypoint_from_schema(data: WaypointSchema, default_frame: str) -> Waypoint:
    """Construct a waypoint from validated YAML data.

    :param data: Validated waypoint data (a 6-tuple or a dictionary)
    :param default_frame: Frame used to build the pose (the waypoint's frame stays unset if absent)
    :return: Cartesian waypoint, or finger-carrying waypoint if finger angles are given
    """
    if not isinstance(data, WaypointDictSchema):
        pose = Pose3D.from_sequence(data, default_frame)
        return CartesianWaypoint(pose.position, pose.orientation)

    pose = Pose3D.from_sequence(data.xyz_rpy, data.frame or default_frame)
    cartesian = CartesianWaypoint(pose.position, pose.orientation, data.frame, data.stamp_s)
    if data.fingers_rad is None:
        return cartesian

    return JointTrajectoryWaypoint(cartesian, FingerAngles(tuple(data.fingers_rad)))


def load_goal(yaml_path: Path, default_frame: str) -> TrajectoryGoal:
    """Load a trajectory goal from the given YAML file.

    :param yaml_path: Path to a YAML file with a `waypoints` list
    :param default_frame: Frame assumed for waypoints that don't specify one
    :return: Trajectory goal preserving the order of the file's waypoints
    """
    schema = TrajectoryGoalSchema.validate_yaml(yaml_path)
    return TrajectoryGoal(tuple(waypoint_from_schema(w, default_frame) for w in schema.waypoints))


def load_frames(yaml_path: Path) -> dict[str, Pose3D]:
    """Load the named static frames (poses relative to their parents) from a goal YAML file."""
    schema = TrajectoryGoalSchema.validate_yaml(yaml_path)
    return {
        name: Pose3D.from_sequence(frame.xyz_rpy, frame.frame)
        for name, frame in schema.frames.items()
    }
