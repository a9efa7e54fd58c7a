"""Data models for controller state tables.

Frozen dataclasses built once while a controller is constructed and
never modified afterwards.
"""

from dataclasses import dataclass, field
from typing import Any

from waypoint._internal.types import Handler


@dataclass(frozen=True, slots=True)
class StateEntry:
    """A parsed ``states`` table entry.

    ``"list"``            -> params=(), wildcard=False (name-only equality)
    ``"edit(id, tab)"``   -> params=("id", "tab")
    ``"search(*)"``       -> wildcard=True (never considered unchanged)
    """

    name: str
    handler: Handler
    params: tuple[str, ...] = ()
    wildcard: bool = False


@dataclass(frozen=True, slots=True)
class DefaultState:
    """The state a controller assumes when delegated an empty name."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ResolvedState:
    """Result of resolving a state name against a controller.

    ``name`` is ``None`` when the result is not local to the resolving
    controller (absolute and relative names).
    """

    name: str | None
    full_name: str
    params: dict[str, Any] = field(default_factory=dict)
