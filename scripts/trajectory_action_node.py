"""Launch a ROS node serving arm trajectory actions over a shared arm controller."""

import rospy

from arm_trajectory.robots import GripperAngleLimits, SimulatedArmController
from arm_trajectory.ros.params import config_from_ros_params, get_ros_param
from arm_trajectory.ros.trajectory_action_server import serve_arm_trajectories
from arm_trajectory.ros.transform_manager import TFFrameTransformer


def main() -> None:
    """Serve the `arm_pose_trajectory` and `arm_trajectory` actions until ROS shuts down."""
    rospy.init_node("trajectory_action_node")

    config = config_from_ros_params()
    transformer = TFFrameTransformer(timeout_s=config.transform_timeout_s)

    # The hardware driver runs out-of-process; this node drives a simulated arm in its place
    arm = SimulatedArmController(
        name=get_ros_param("~arm_name", str, "jaco"),
        base_frame=config.canonical_frame,
        finger_limits=GripperAngleLimits(
            open_rad=get_ros_param("~finger_open_rad", float, 0.0),
            closed_rad=get_ros_param("~finger_closed_rad", float, 1.2),
        ),
        motion_duration_s=get_ros_param("~motion_duration_s", float, 0.5),
    )

    _ = serve_arm_trajectories(arm, transformer, config)
    rospy.spin()


if __name__ == "__main__":
    main()
