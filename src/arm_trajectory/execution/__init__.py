"""Import the timing and signaling primitives used to drive goal execution."""

from .rates import LoopRate as LoopRate
from .rates import Rate as Rate
from .signals import ControlSignals as ControlSignals
from .signals import GoalSignals as GoalSignals
