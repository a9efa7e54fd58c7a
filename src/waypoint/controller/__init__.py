"""Controllers — tree nodes that resolve, compare and delegate states.

State tables are parsed and validated once per controller instance, and
merged along the class hierarchy once per class.
"""

from waypoint.controller.controller import Controller
from waypoint.controller.types import DefaultState, ResolvedState, StateEntry

__all__ = ["Controller", "DefaultState", "ResolvedState", "StateEntry"]
