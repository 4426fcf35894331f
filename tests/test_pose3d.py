"""Unit tests for Pose3D, a class representing poses in 3D space."""

import hypothesis.strategies as st
import numpy as np
import pytest
from hypothesis import given

from arm_trajectory.spatial import EulerRPY, Pose3D, Quaternion, euclidean_distance_3d_m

from .spatial_strategies import euler_rpys, poses_3d, quaternions


@given(poses_3d())
def test_pose3d_to_homogeneous_matrix_and_back(pose: Pose3D) -> None:
    """Verify that any Pose3D is unchanged after converting to and from a homogeneous matrix."""
    # Arrange/Act - Given a 3D pose, convert to and from a homogeneous transformation matrix
    matrix = pose.to_homogeneous_matrix()
    result_pose = Pose3D.from_homogeneous_matrix(matrix, ref_frame=pose.ref_frame)

    # Assert - Expect that the matrix is 4x4 and the resulting Pose3D equals the original
    assert matrix.shape == (4, 4)
    assert pose.approx_equal(result_pose)


@given(poses_3d())
def test_pose3d_identity_multiplication(pose: Pose3D) -> None:
    """Verify that any Pose3D is unchanged after multiplication by the identity pose."""
    # Arrange - Create a pose representing the identity transformation in the pose's frame
    identity_pose = Pose3D.identity(pose.ref_frame)

    # Act - Compute left-side and right-side multiplications by the identity pose
    left_result = identity_pose @ pose
    right_result = pose @ identity_pose

    # Assert - Expect that both multiplication results equal the original pose
    assert pose.approx_equal(left_result)
    assert pose.approx_equal(right_result)


@given(poses_3d(), st.text(min_size=1))
def test_pose3d_inverse_multiplication(pose: Pose3D, pose_frame: str) -> None:
    """Verify that multiplying any Pose3D by its inverse gives the identity transform."""
    # Arrange/Act - Given a 3D pose, find its inverse and the result of multiplying the two
    inverse_pose = pose.inverse(pose_frame)
    left_product = inverse_pose @ pose
    right_product = pose @ inverse_pose

    # Assert - Left-multiplying gives the pose's own frame; right-multiplying keeps its ref. frame
    assert Pose3D.identity(pose_frame).approx_equal(left_product, atol=1e-06)
    assert Pose3D.identity(pose.ref_frame).approx_equal(right_product, atol=1e-06)


def test_pose3d_from_sequence() -> None:
    """Verify that a Pose3D built from an XYZ-RPY sequence reports the same values."""
    # Arrange - Define a pose as (x, y, z, roll, pitch, yaw) values
    data = (0.1, -0.2, 0.3, 0.4, -0.5, 0.6)

    # Act - Construct the pose and convert it back into a tuple
    pose = Pose3D.from_sequence(data, ref_frame="camera")

    # Assert - Expect the same values back and the given reference frame
    assert np.allclose(pose.to_xyz_rpy(), data)
    assert pose.ref_frame == "camera"


def test_pose3d_from_sequence_rejects_wrong_length() -> None:
    """Verify that constructing a Pose3D from a sequence of the wrong length fails."""
    with pytest.raises(ValueError):
        Pose3D.from_sequence([0.0, 1.0, 2.0])


def test_pose3d_matmul_rejects_non_pose() -> None:
    """Verify that multiplying a Pose3D by anything other than a Pose3D fails with a TypeError."""
    with pytest.raises(TypeError):
        Pose3D.identity() @ np.eye(4)  # type: ignore[operator]


@given(quaternions())
def test_quaternion_is_normalized(q: Quaternion) -> None:
    """Verify that every constructed quaternion has unit norm."""
    assert np.isclose(np.linalg.norm(q.to_array()), 1.0)


def test_zero_quaternion_is_rejected() -> None:
    """Verify that a zero-valued quaternion cannot be constructed."""
    with pytest.raises(ValueError):
        Quaternion(0.0, 0.0, 0.0, 0.0)


@given(euler_rpys())
def test_euler_rpy_to_quaternion_and_back(rpy: EulerRPY) -> None:
    """Verify that Euler angles describe the same rotation after a round-trip through a quaternion."""
    # Arrange/Act - Convert the Euler angles to a quaternion, to Euler angles, and back again
    q = rpy.to_quaternion()
    result = q.to_euler_rpy().to_quaternion()

    # Assert - Expect that both quaternions represent the same rotation
    assert q.approx_equal(result, atol=1e-06)


@given(poses_3d(ref_frame="map"), poses_3d(ref_frame="map"))
def test_euclidean_distance_3d_m(pose_a: Pose3D, pose_b: Pose3D) -> None:
    """Verify that the Euclidean distance (meters) between any two 3D poses is symmetric and non-negative."""
    # Arrange/Act - Given two 3D poses, compute the Euclidean distance between them both ways
    distance_ab = euclidean_distance_3d_m(pose_a, pose_b)
    distance_ba = euclidean_distance_3d_m(pose_b, pose_a)

    # Assert - Euclidean distances should be non-negative and symmetric
    assert distance_ab >= 0.0
    assert distance_ab == pytest.approx(distance_ba)


def test_euclidean_distance_3d_m_rejects_mismatched_frames() -> None:
    """Verify that distances between poses in different frames are rejected."""
    with pytest.raises(ValueError):
        euclidean_distance_3d_m(Pose3D.identity("map"), Pose3D.identity("camera"))
