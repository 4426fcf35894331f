"""Define functions to convert between trajectory data structures and ROS messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import rospy
from geometry_msgs.msg import Point, Pose, PoseStamped, Transform, TransformStamped
from geometry_msgs.msg import Quaternion as QuaternionMsg

from arm_trajectory.robots import FingerAngles
from arm_trajectory.spatial import DEFAULT_FRAME, Point3D, Pose3D, Quaternion
from arm_trajectory.trajectories import CartesianWaypoint, JointTrajectoryWaypoint, TrajectoryGoal

if TYPE_CHECKING:
    from arm_trajectory.trajectories import TrajectoryFeedback, TrajectoryResult


def point_to_msg(point: Point3D) -> Point:
    """Convert the given point into a geometry_msgs/Point message."""
    return Point(point.x, point.y, point.z)


def point_from_msg(point_msg: Point) -> Point3D:
    """Construct a Point3D from a geometry_msgs/Point message."""
    return Point3D(point_msg.x, point_msg.y, point_msg.z)


def quaternion_to_msg(q: Quaternion) -> QuaternionMsg:
    """Convert the given quaternion into a geometry_msgs/Quaternion message."""
    return QuaternionMsg(q.x, q.y, q.z, q.w)


def quaternion_from_msg(q_msg: QuaternionMsg) -> Quaternion:
    """Construct a Quaternion from a geometry_msgs/Quaternion message."""
    return Quaternion(q_msg.x, q_msg.y, q_msg.z, q_msg.w)


def pose_to_msg(pose: Pose3D) -> Pose:
    """Convert the given pose into a geometry_msgs/Pose message."""
    return Pose(point_to_msg(pose.position), quaternion_to_msg(pose.orientation))


def pose_to_stamped_msg(pose: Pose3D) -> PoseStamped:
    """Convert the given pose into a geometry_msgs/PoseStamped message stamped with the current time."""
    msg = PoseStamped()
    msg.header.frame_id = pose.ref_frame
    msg.header.stamp = rospy.Time.now()
    msg.pose = pose_to_msg(pose)
    return msg


def pose_from_msg(pose_msg: Pose | PoseStamped) -> Pose3D:
    """Construct a Pose3D from a geometry_msgs/Pose or geometry_msgs/PoseStamped message.

    :param pose_msg: ROS message representing a pose or time-stamped pose
    :return: Constructed Pose3D instance
    :raises TypeError: If the given message is neither a geometry_msgs/Pose nor PoseStamped
    """
    if isinstance(pose_msg, Pose):
        frame_id = DEFAULT_FRAME
        pose = pose_msg
    elif isinstance(pose_msg, PoseStamped):
        frame_id = pose_msg.header.frame_id
        pose = pose_msg.pose
    else:
        raise TypeError(f"Received unexpected ROS message type: {type(pose_msg)}")

    return Pose3D(point_from_msg(pose.position), quaternion_from_msg(pose.orientation), frame_id)


def pose_from_tf_msg(tf_msg: Transform, ref_frame: str) -> Pose3D:
    """Construct a Pose3D from a geometry_msgs/Transform message."""
    translation = tf_msg.translation
    position = Point3D(translation.x, translation.y, translation.z)
    return Pose3D(position, quaternion_from_msg(tf_msg.rotation), ref_frame)


def pose_from_tf_stamped_msg(tf_stamped_msg: TransformStamped) -> Pose3D:
    """Construct a Pose3D from a geometry_msgs/TransformStamped message."""
    return pose_from_tf_msg(tf_stamped_msg.transform, tf_stamped_msg.header.frame_id)


def waypoint_from_stamped_msg(pose_msg: PoseStamped) -> CartesianWaypoint:
    """Construct a Cartesian waypoint from a geometry_msgs/PoseStamped message.

    An empty frame ID leaves the waypoint in the arm's base frame; a zero stamp requests
    the latest available transform.
    """
    pose = pose_from_msg(pose_msg)
    frame = pose_msg.header.frame_id.lstrip("/") or None
    stamp_s = pose_msg.header.stamp.to_sec() or None
    return CartesianWaypoint(pose.position, pose.orientation, frame, stamp_s)


def fingers_from_msg(fingers_msg: Any) -> FingerAngles:
    """Construct finger angles from a finger position message (fields `finger1` to `finger3`)."""
    return FingerAngles((fingers_msg.finger1, fingers_msg.finger2, fingers_msg.finger3))


def pose_goal_from_msg(goal_msg: Any) -> TrajectoryGoal[CartesianWaypoint]:
    """Construct a Cartesian trajectory goal from a goal whose `trajectory` lists PoseStamped messages."""
    return TrajectoryGoal(tuple(waypoint_from_stamped_msg(p) for p in goal_msg.trajectory))


def finger_goal_from_msg(goal_msg: Any) -> TrajectoryGoal[JointTrajectoryWaypoint]:
    """Construct a finger-carrying trajectory goal from a goal message.

    :param goal_msg: Goal whose `trajectory` items each have a `pose` and `fingers` field
    :return: Goal preserving the order of the message's trajectory points
    """
    waypoints = tuple(
        JointTrajectoryWaypoint(waypoint_from_stamped_msg(p.pose), fingers_from_msg(p.fingers))
        for p in goal_msg.trajectory
    )
    return TrajectoryGoal(waypoints)


def fill_feedback_msg(feedback_msg: Any, feedback: TrajectoryFeedback) -> Any:
    """Populate the `pose` field of an action feedback message from trajectory feedback."""
    feedback_msg.pose = pose_to_stamped_msg(feedback.pose)
    return feedback_msg


def fill_result_msg(result_msg: Any, result: TrajectoryResult, canonical_frame: str) -> Any:
    """Populate the `pose` field of an action result message from a trajectory result.

    A result without a pose is reported as a header-only message in the canonical frame.
    """
    if result.pose is None:
        result_msg.pose = PoseStamped()
        result_msg.pose.header.frame_id = canonical_frame
        result_msg.pose.header.stamp = rospy.Time.now()
    else:
        result_msg.pose = pose_to_stamped_msg(result.pose)
    return result_msg
