"""Import ROS adapters for executing arm trajectory goals."""

from .params import config_from_ros_params as config_from_ros_params
from .params import get_ros_param as get_ros_param
from .trajectory_action_server import RosControlSignals as RosControlSignals
from .trajectory_action_server import TrajectoryActionServer as TrajectoryActionServer
from .trajectory_action_server import serve_arm_trajectories as serve_arm_trajectories
from .transform_manager import TFFrameTransformer as TFFrameTransformer
