"""
Runtime package: tree storage plus the event bus and timer utilities that are
commonly composed with a state machine.
"""

from .graph import StateGraph
from .pubsub import PubSub
from .timers import ScheduledTask

__all__ = ["StateGraph", "PubSub", "ScheduledTask"]
