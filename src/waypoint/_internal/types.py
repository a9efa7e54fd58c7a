"""Shared type aliases used across waypoint modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# State handler — receives the descriptor's parameter mapping
Handler: TypeAlias = Callable[[dict[str, Any]], Any]

# Handler as declared in a controller's ``states`` table: a callable or a method name
HandlerRef: TypeAlias = Callable[..., Any] | str

# State parameters as supplied by callers
Params: TypeAlias = Mapping[str, Any]

# Registry change listener — receives the newly installed descriptor
ChangeListener: TypeAlias = Callable[[Any], Any]
