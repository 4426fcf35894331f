"""Define utility functions to compute distances between 3D poses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from arm_trajectory.spatial.poses import Pose3D
    from arm_trajectory.spatial.rotations import Quaternion


def euclidean_distance_3d_m(pose_a: Pose3D, pose_b: Pose3D) -> float:
    """Compute the Euclidean distance (meters) between two 3D poses.

    :param pose_a: First 3D pose used to compute the distance
    :param pose_b: Second 3D pose used to compute the distance
    :return: Straight-line distance (meters) in 3D space between the two poses
    :raises ValueError: If the poses are expressed in different reference frames
    """
    if pose_a.ref_frame != pose_b.ref_frame:
        raise ValueError(f"Reference frames differ: {pose_a.ref_frame} vs {pose_b.ref_frame}.")

    return float(np.linalg.norm(pose_a.position.to_array() - pose_b.position.to_array()))


def angle_between_quaternions_deg(q1: Quaternion, q2: Quaternion) -> float:
    """Compute the angle (degrees) between two unit quaternions representing 3D rotations.

    Reference: https://math.stackexchange.com/a/167828
    """
    dot = float(np.clip(abs(np.dot(q1.to_array(), q2.to_array())), 0.0, 1.0))
    return float(np.rad2deg(2.0 * np.arccos(dot)))
