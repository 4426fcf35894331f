"""Unit tests for the in-memory frame transformer."""

import pytest
from hypothesis import given

from arm_trajectory.spatial import ARM_BASE_FRAME, Pose3D, StaticFrameTransformer, TransformUnavailableError

from .fakes import ARM_IN_WORLD, CAMERA_FRAME, WORLD_FRAME, make_transformer
from .spatial_strategies import poses_3d


def test_same_frame_transform_is_identity() -> None:
    """Verify that transforming a pose into its own frame returns it unchanged, even for unknown frames."""
    # Arrange - Create an empty frame tree and a pose in a frame it doesn't know
    transformer = StaticFrameTransformer()
    pose = Pose3D.from_xyz_rpy(1.0, 2.0, 3.0, ref_frame="unknown")

    # Act/Assert - Expect the transform to be available and the pose to be unchanged
    assert transformer.can_transform("unknown", "unknown", None)
    assert transformer.transform(pose, "unknown") == pose


def test_child_frame_origin_expressed_in_parent() -> None:
    """Verify that a frame's origin, expressed in its parent, equals the frame's stored pose."""
    # Arrange - Create the test frame tree
    transformer = make_transformer()

    # Act - Express the origin of the arm's base frame in the world frame
    result = transformer.transform(Pose3D.identity(ARM_BASE_FRAME), WORLD_FRAME)

    # Assert - Expect the stored pose of the arm's base frame
    assert result.approx_equal(ARM_IN_WORLD)


@given(poses_3d(ref_frame=CAMERA_FRAME))
def test_transform_there_and_back(pose: Pose3D) -> None:
    """Verify that converting a pose between sibling frames and back recovers the original pose."""
    # Arrange - Create the test frame tree
    transformer = make_transformer()

    # Act - Express a camera-frame pose in the arm's base frame, then convert it back
    in_arm = transformer.transform(pose, ARM_BASE_FRAME)
    result = transformer.transform(in_arm, CAMERA_FRAME)

    # Assert - Expect the intermediate pose in the arm frame and the original pose after returning
    assert in_arm.ref_frame == ARM_BASE_FRAME
    assert pose.approx_equal(result, rtol=1e-04, atol=1e-04)


def test_unknown_frame_is_unavailable() -> None:
    """Verify that frames outside the tree can't be transformed and that `try_transform` reports None."""
    # Arrange - Create the test frame tree and a pose in a frame it doesn't know
    transformer = make_transformer()
    pose = Pose3D.identity("gripper_camera")

    # Act/Assert - Expect availability checks and transforms to fail
    assert not transformer.can_transform(ARM_BASE_FRAME, "gripper_camera", None)
    assert transformer.try_transform(pose, ARM_BASE_FRAME) is None
    with pytest.raises(TransformUnavailableError):
        transformer.transform(pose, ARM_BASE_FRAME)


def test_disconnected_trees_are_unavailable() -> None:
    """Verify that frames with different roots cannot be converted between."""
    # Arrange - Add a frame attached to a second, unrelated root
    transformer = make_transformer()
    transformer.set_frame("table", Pose3D.identity("kitchen"))

    # Act/Assert - Expect no transform between the two trees
    assert not transformer.can_transform(ARM_BASE_FRAME, "table", None)
    assert transformer.can_transform("kitchen", "table", None)


def test_removed_frame_is_unavailable() -> None:
    """Verify that a removed frame can no longer be transformed."""
    transformer = make_transformer()
    transformer.remove_frame(CAMERA_FRAME)

    assert not transformer.can_transform(ARM_BASE_FRAME, CAMERA_FRAME, None)


def test_frame_cannot_be_its_own_parent() -> None:
    """Verify that a frame cannot be set relative to itself."""
    with pytest.raises(ValueError):
        make_transformer().set_frame("loop", Pose3D.identity("loop"))


def test_cyclic_frames_are_rejected() -> None:
    """Verify that a cycle in the frame tree is reported when it's traversed."""
    # Arrange - Make two frames each other's parents
    transformer = StaticFrameTransformer({"a": Pose3D.identity("b"), "b": Pose3D.identity("a")})

    # Act/Assert - Expect a cycle to be reported
    with pytest.raises(ValueError):
        transformer.can_transform("a", "c", None)
