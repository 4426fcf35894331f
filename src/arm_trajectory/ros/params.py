"""Define utility functions to support loading from ROS parameters."""

from __future__ import annotations

from typing import TypeVar

import rospy

from arm_trajectory.trajectories import TrajectoryExecutorConfig

ParamT = TypeVar("ParamT")


def get_ros_param(name: str, param_t: type[ParamT], default_value: ParamT | None = None) -> ParamT:
    """Retrieve the parameter with the given name and type from the ROS parameter server.

    :param name: Name of the retrieved ROS parameter
    :param param_t: Type of the retrieved parameter
    :param default_value: Default value used if the ROS parameter doesn't exist (defaults to None)
    :return: Value retrieved from the ROS parameter server
    """
    if default_value is None:
        param_value = rospy.get_param(name)
    else:
        param_value = rospy.get_param(name, default=default_value)

    return param_t(param_value)


def config_from_ros_params(namespace: str = "~") -> TrajectoryExecutorConfig:
    """Load a trajectory executor configuration from the node's ROS parameters.

    :param namespace: Namespace of the parameters (defaults to the node's private namespace)
    :return: Configuration using defaults for any parameters that aren't set
    """
    defaults = TrajectoryExecutorConfig()
    return TrajectoryExecutorConfig(
        canonical_frame=get_ros_param(f"{namespace}canonical_frame", str, defaults.canonical_frame),
        loop_hz=get_ros_param(f"{namespace}loop_hz", float, defaults.loop_hz),
        transform_timeout_s=get_ros_param(
            f"{namespace}transform_timeout_s",
            float,
            defaults.transform_timeout_s,
        ),
        position_tolerance_m=get_ros_param(
            f"{namespace}position_tolerance_m",
            float,
            defaults.position_tolerance_m,
        ),
    )
