"""Import the waypoint types and the components that execute trajectory goals."""

from .config import TrajectoryExecutorConfig as TrajectoryExecutorConfig
from .dispatcher import DispatchReport as DispatchReport
from .dispatcher import WaypointDispatcher as WaypointDispatcher
from .executor import TrajectoryExecutor as TrajectoryExecutor
from .goal_files import load_frames as load_frames
from .goal_files import load_goal as load_goal
from .monitor import ExecutionMonitor as ExecutionMonitor
from .monitor import FeedbackCallback as FeedbackCallback
from .monitor import MonitorState as MonitorState
from .outcome import ExecutionOutcome as ExecutionOutcome
from .outcome import FailureKind as FailureKind
from .outcome import TrajectoryFeedback as TrajectoryFeedback
from .outcome import TrajectoryResult as TrajectoryResult
from .validator import GoalValidator as GoalValidator
from .waypoints import CartesianWaypoint as CartesianWaypoint
from .waypoints import JointTrajectoryWaypoint as JointTrajectoryWaypoint
from .waypoints import TrajectoryGoal as TrajectoryGoal
from .waypoints import Waypoint as Waypoint
from .waypoints import WaypointT as WaypointT
