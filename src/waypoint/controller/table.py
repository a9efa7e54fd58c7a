"""State table parsing.

Turns a controller's declarative ``states`` mapping into validated
:class:`StateEntry` objects. Keys follow a small grammar::

    "list"             state "list", parameters irrelevant to equality
    "edit(id, tab)"    state "edit", equal only while id and tab are equal
    "search(*)"        state "search", never equal (always re-executes)

Values are names of methods on the controller or callables taking the
state params.
"""

import re
from collections.abc import Mapping
from typing import Any

from waypoint._internal.types import Handler, HandlerRef
from waypoint.controller.types import DefaultState, StateEntry
from waypoint.errors import InvalidDefaultState, InvalidStateName, UnresolvedHandler
from waypoint.state.descriptor import SEPARATOR
from waypoint.state.registry import is_valid_name

# Captures the parameter list inside the first pair of parentheses
STATE_PARAMS_RE = re.compile(r"\((.+?)\)")

_PARAM_SPLIT_RE = re.compile(r"\s*,\s*")


def local_name(key: str) -> str:
    """Return the state name part of a ``states`` key."""
    if STATE_PARAMS_RE.search(key):
        return key[: key.index("(")].strip()
    return key


def merge_declarations(
    inherited: Mapping[str, HandlerRef],
    own: Mapping[str, HandlerRef],
) -> dict[str, HandlerRef]:
    """Combine a base class's ``states`` with a subclass's own.

    Entries collide on their local name, so ``"edit(*)"`` in *own*
    replaces ``"edit(id)"`` in *inherited*. Non-conflicting entries from
    both sides are kept, inherited ones first.
    """
    merged: dict[str, tuple[str, HandlerRef]] = {
        local_name(key): (key, ref) for key, ref in inherited.items()
    }
    for key, ref in own.items():
        merged[local_name(key)] = (key, ref)
    return dict(merged.values())


def _resolve_handler(ref: HandlerRef, owner: Any) -> Handler | None:
    if isinstance(ref, str):
        ref = getattr(owner, ref, None)
    return ref if callable(ref) else None


def parse_states(
    declared: Mapping[str, HandlerRef],
    owner: Any,
    *,
    label: str,
) -> tuple[dict[str, StateEntry], int]:
    """Parse a ``states`` mapping into a lookup table.

    Args:
        declared: The merged ``states`` declaration of the controller class.
        owner: The controller instance handlers are resolved against.
        label: Controller name used in error messages.

    Returns:
        ``(table, count)``: entries keyed by local name, and the number of
        declared states.

    Raises:
        InvalidStateName: A name has an invalid format or contains a dot.
        UnresolvedHandler: A handler does not resolve to a callable.
    """
    table: dict[str, StateEntry] = {}

    for key, ref in declared.items():
        name = key
        params: tuple[str, ...] = ()
        wildcard = False

        matches = STATE_PARAMS_RE.search(key)
        if matches:
            name = key[: key.index("(")].strip()
            group = matches.group(1).strip()
            if group == "*":
                wildcard = True
            else:
                params = tuple(p for p in _PARAM_SPLIT_RE.split(group) if p)

        if not is_valid_name(name):
            msg = f'State name "{name}" of "{label}" has an invalid format.'
            raise InvalidStateName(msg)
        if SEPARATOR in name:
            msg = f'State name "{name}" of "{label}" must be local (cannot contain dots).'
            raise InvalidStateName(msg)

        handler = _resolve_handler(ref, owner)
        if handler is None:
            msg = f'State handler "{name}" of "{label}" references a nonexistent function.'
            raise UnresolvedHandler(msg)

        table[name] = StateEntry(name=name, handler=handler, params=params, wildcard=wildcard)

    return table, len(declared)


def parse_default_state(
    declared: str | DefaultState | Mapping[str, Any] | None,
    states: Mapping[str, StateEntry],
    *,
    label: str,
) -> DefaultState | None:
    """Normalize a ``default_state`` declaration.

    Accepts a bare name, a :class:`DefaultState`, or a mapping with
    ``name`` and optional ``params``.

    Raises ``InvalidDefaultState`` if the name is empty or undeclared.
    """
    if declared is None:
        return None

    if isinstance(declared, str):
        default = DefaultState(name=declared)
    elif isinstance(declared, DefaultState):
        default = DefaultState(name=declared.name, params=dict(declared.params))
    else:
        default = DefaultState(
            name=declared.get("name") or "",
            params=dict(declared.get("params") or {}),
        )

    if not default.name:
        msg = f'The default state of "{label}" cannot be empty.'
        raise InvalidDefaultState(msg)
    if default.name not in states:
        msg = f'The default state of "{label}" points to a nonexistent state "{default.name}".'
        raise InvalidDefaultState(msg)

    return default
