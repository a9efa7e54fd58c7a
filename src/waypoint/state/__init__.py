"""State descriptors and the registry that owns the current one."""

from waypoint.state.descriptor import State, TransitionInfo
from waypoint.state.registry import StateRegistry, StateRoute

__all__ = ["State", "StateRegistry", "StateRoute", "TransitionInfo"]
