"""State registry — the single authority on the current application state.

Holds the registered state names with their URL patterns, owns the one
globally current descriptor, and tells listeners whenever it changes.
Controllers never keep a module-level reference to it; each one is handed
its registry at construction.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from waypoint._internal.types import ChangeListener, Params
from waypoint.config import NavigationConfig
from waypoint.errors import InvalidStateName, UnknownState
from waypoint.state.descriptor import INFO_KEY, SEPARATOR, State, TransitionInfo
from waypoint.state.params import PatternSegment, format_param, parse_pattern

logger = logging.getLogger("waypoint.registry")

# Accepted full-name grammar; local names additionally may not contain dots
STATE_NAME_RE = re.compile(r"^[a-z0-9_\-]+(\.[a-z0-9_\-]+)*$", re.IGNORECASE)


def is_valid_name(name: str) -> bool:
    """Check *name* against the state-name grammar."""
    return bool(name) and STATE_NAME_RE.match(name) is not None


@dataclass(frozen=True, slots=True)
class StateRoute:
    """A registered state and the URL pattern it expands to."""

    name: str
    pattern: str
    segments: tuple[PatternSegment, ...]


class StateRegistry:
    """In-memory state authority.

    Usage::

        registry = StateRegistry()
        registry.register("articles", "/articles")
        registry.register("articles.edit", "/articles/{id:int}/edit")
        registry.on_change(root.delegate_state)
        registry.set_current("articles.edit", {"id": 3})
    """

    __slots__ = ("_current", "_listeners", "_routes", "config")

    def __init__(self, config: NavigationConfig | None = None) -> None:
        self.config = config or NavigationConfig()
        self._routes: dict[str, StateRoute] = {}
        self._current: State | None = None
        self._listeners: list[ChangeListener] = []

    # -- Registration --

    def is_valid(self, name: str) -> bool:
        return is_valid_name(name)

    def register(self, name: str, pattern: str | None = None) -> StateRoute:
        """Register a full state name, optionally with a URL pattern.

        Without a pattern the URL is derived from the name itself
        (``"articles.edit"`` -> ``"/articles/edit"``).
        """
        if not is_valid_name(name):
            msg = f'State name "{name}" has an invalid format.'
            raise InvalidStateName(msg)

        if pattern is None:
            pattern = "/" + name.replace(SEPARATOR, "/")
        route = StateRoute(name=name, pattern=pattern, segments=parse_pattern(pattern))
        self._routes[name] = route
        return route

    def unregister(self, name: str) -> None:
        self._routes.pop(name, None)

    def is_registered(self, name: str) -> bool:
        return name in self._routes

    @property
    def routes(self) -> list[StateRoute]:
        """Return all registered states in registration order."""
        return list(self._routes.values())

    # -- Current state --

    def get_current(self) -> State | None:
        return self._current

    def create_state(self, name: str = "", params: Params | None = None) -> State:
        return State(name, params)

    def set_current(
        self,
        name: str,
        params: Params | None = None,
        options: Params | None = None,
    ) -> bool:
        """Install a new current state.

        Returns ``True`` if the current state actually changed. When the
        requested state is fully equal to the current one (and
        ``options["force"]`` is not set) nothing happens and ``False`` is
        returned; callers should then reuse :meth:`get_current`.
        """
        options = options or {}
        if name and not is_valid_name(name):
            msg = f'State name "{name}" has an invalid format.'
            raise InvalidStateName(msg)

        state = self.create_state(name, params)
        previous = self._current
        if previous is not None and not options.get("force") and previous.is_fully_equal(state):
            logger.debug("State %r unchanged", name)
            return False

        state.params[INFO_KEY] = TransitionInfo(new_state=state, previous_state=previous)
        self._current = state
        logger.debug(
            "State changed %r -> %r",
            previous.full_name if previous is not None else None,
            state.full_name,
        )

        for listener in list(self._listeners):
            listener(state)
        return True

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Call *listener* with the new descriptor after every change.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- URLs --

    def generate_url(
        self,
        name: str,
        params: Params | None = None,
        absolute: bool = False,
    ) -> str:
        """Expand the URL pattern registered for *name*.

        Raises ``UnknownState`` if *name* is not registered and
        ``UrlBuildError`` if a placeholder cannot be filled.
        """
        route = self._routes.get(name)
        if route is None:
            msg = f'Cannot generate URL for unknown state "{name}".'
            raise UnknownState(msg)

        values: dict[str, Any] = dict(params or {})
        parts = [
            format_param(seg, values) if seg.is_param else seg.value
            for seg in route.segments
        ]
        url = "/" + "/".join(parts)
        if absolute:
            return self.config.base_url.rstrip("/") + url
        return url

    def __repr__(self) -> str:
        current = self._current.full_name if self._current is not None else None
        return f"<StateRegistry states={len(self._routes)} current={current!r}>"
