"""Controller — a node of the controller tree that owns part of the state.

Each controller declares the local state names it handles. A full state
name such as ``"articles.edit"`` is split across the tree: the root owns
``articles``, one of its children owns ``edit``. Delegating a state walks
that path, and the first controller whose piece actually changed runs
its handler.

Usage::

    class ArticlesController(Controller):
        default_state = "list"
        states = {
            "list": "show_list",
            "edit(id)": "edit_article",
        }

        def show_list(self, params):
            ...

        def edit_article(self, params):
            ...

    registry = StateRegistry()
    articles = ArticlesController(registry)
    articles.set_state("edit", {"id": 3})
"""

import logging
from collections.abc import Mapping
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, ClassVar

from waypoint._internal.types import HandlerRef, Params
from waypoint.controller.table import merge_declarations, parse_default_state, parse_states
from waypoint.controller.types import DefaultState, ResolvedState, StateEntry
from waypoint.errors import InvalidRelativeState
from waypoint.joint import Joint
from waypoint.state.descriptor import INFO_KEY, State, TransitionInfo, join_name, public_params
from waypoint.state.registry import StateRegistry

logger = logging.getLogger("waypoint.controller")

# Nesting level of the delegation in flight. Shared by propagation and by
# handlers re-entering children through the "$info" envelope.
_delegation_depth: ContextVar[int] = ContextVar("waypoint_delegation_depth", default=0)

ABSOLUTE_PREFIX = "/"
RELATIVE_PREFIX = "../"


def _fill_in(target: dict[str, Any], source: Params) -> None:
    """Copy keys from *source* that *target* does not have yet."""
    for key, value in source.items():
        if key != INFO_KEY and key not in target:
            target[key] = value


class Controller(Joint):
    """Base class for state-handling controllers.

    Subclasses declare ``states`` (a mapping of state keys to handlers)
    and optionally ``default_state``. Declarations merge along the class
    hierarchy, subclass entries winning on the same local name.
    """

    states: ClassVar[Mapping[str, HandlerRef]] = {}
    default_state: ClassVar[str | DefaultState | Mapping[str, Any] | None] = None

    _declared_states: ClassVar[dict[str, HandlerRef]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared: dict[str, HandlerRef] = {}
        for klass in reversed(cls.__mro__):
            own = klass.__dict__.get("states")
            if own:
                declared = merge_declarations(declared, own)
        cls._declared_states = declared

    def __init__(self, registry: StateRegistry, name: str | None = None) -> None:
        super().__init__(name)
        self.registry = registry
        self._current_state: State | None = None
        self._previous_state: State | None = None
        self._states, self._nr_states = parse_states(
            self._declared_states, self, label=self.name
        )
        self._default_state = parse_default_state(
            type(self).default_state, self._states, label=self.name
        )

    # -- Inspection --

    @property
    def current_state(self) -> State | None:
        """The state this controller last committed, or ``None``."""
        return self._current_state

    @property
    def previous_state(self) -> State | None:
        """The state committed before :attr:`current_state`."""
        return self._previous_state

    @property
    def state_table(self) -> Mapping[str, StateEntry]:
        return MappingProxyType(self._states)

    @property
    def default(self) -> DefaultState | None:
        return self._default_state

    # -- Public API --

    def generate_url(
        self,
        name: str = "",
        params: Params | None = None,
        absolute: bool = False,
    ) -> str:
        """Generate the URL of a state named relative to this controller."""
        resolved = self.resolve_full_state(name, params)
        return self.registry.generate_url(resolved.full_name, resolved.params, absolute)

    def set_state(
        self,
        name: str = "",
        params: Params | None = None,
        options: Params | None = None,
    ) -> None:
        """Move the application to a state named relative to this controller.

        Registered states go through the registry, whose listeners drive
        delegation from the top. If the registry reports no change, or the
        state is not registered at all, the state is delegated to this
        controller directly.
        """
        resolved = self.resolve_full_state(name, params)

        if resolved.name is None:
            self.registry.set_current(resolved.full_name, resolved.params, options)
            return

        if self.registry.is_registered(resolved.full_name):
            if self.registry.set_current(resolved.full_name, resolved.params, options):
                return
            # Reuse the equal descriptor already in place
            state = self.registry.get_current().seek_to(resolved.name)
        else:
            state = self.registry.create_state(resolved.name, resolved.params)
            state.params[INFO_KEY] = TransitionInfo(
                new_state=state,
                previous_state=self._previous_state,
            )

        self.delegate_state(state)

    def delegate_state(self, state: State | Params | None = None) -> None:
        """Hand *state* to this controller to execute or propagate.

        Accepts a :class:`State`, a parameter mapping carrying a
        ``"$info"`` transition envelope (as received by handlers), or
        nothing, in which case the registry's current state is used.
        """
        depth = _delegation_depth.get()
        if depth > self.registry.config.max_depth:
            self._report(
                'State "%s" exceeds the maximum delegation depth (%d) at "%s".',
                getattr(self._unwrap(state), "full_name", ""),
                self.registry.config.max_depth,
                self.name,
            )
            return

        token = _delegation_depth.set(depth + 1)
        try:
            self._delegate(state)
        finally:
            _delegation_depth.reset(token)

    def resolve_full_state(self, name: str = "", params: Params | None = None) -> ResolvedState:
        """Resolve a state name into its full name and parameters.

        - ``/a.b`` is absolute: used as is, no local name.
        - ``../x`` is resolved by the parent controller, no local name.
        - ``""`` maps to the default state, if any.
        - Anything else is local: ancestors in a state prefix their local
          names and fill in parameters that are still missing.

        Explicit *params* always win over inherited and default ones.
        """
        name = name or ""
        explicit = public_params(params or {})

        if name.startswith(ABSOLUTE_PREFIX):
            return ResolvedState(name=None, full_name=name[len(ABSOLUTE_PREFIX):], params=explicit)

        if name.startswith(RELATIVE_PREFIX):
            parent = self.parent
            if not isinstance(parent, Controller):
                msg = f'Cannot resolve relative state "{name}" in "{self.name}".'
                raise InvalidRelativeState(msg)
            resolved = parent.resolve_full_state(name[len(RELATIVE_PREFIX):], explicit)
            resolved.name = None
            return resolved

        current = self._current_state
        inherited = public_params(current.params) if current is not None else {}
        resolved = ResolvedState(name=name, full_name=name, params={**inherited, **explicit})

        ancestor = self.parent
        while isinstance(ancestor, Controller):
            ancestor_state = ancestor.current_state
            if ancestor_state is None:
                break
            resolved.full_name = join_name(ancestor_state.name, resolved.full_name)
            _fill_in(resolved.params, ancestor_state.params)
            ancestor = ancestor.parent

        default = self._default_state
        if not resolved.name and default is not None:
            resolved.name = default.name
            resolved.full_name = join_name(resolved.full_name, default.name)
            _fill_in(resolved.params, default.params)

        return resolved

    def is_same_state(self, state: State, base: State | None = None) -> bool:
        """Check whether *state* counts as unchanged against *base*.

        *base* defaults to the current state. Only the parameters listed in
        the state's declaration are compared; wildcard states never match.
        """
        if base is None:
            base = self._current_state
        if base is None:
            return False

        entry = self._states.get(state.name)
        if entry is None:
            return base.is_equal(state)
        if entry.wildcard:
            return False
        return base.is_equal(state, entry.params)

    def destroy(self) -> None:
        super().destroy()
        self._current_state = None
        self._previous_state = None

    # -- Delegation internals --

    def _delegate(self, state: State | Params | None) -> None:
        state = self._unwrap(state)
        if state is None:
            return

        self._fill_state_if_empty(state)
        name = state.name

        if not name:
            if self._nr_states:
                self._report('No default state defined in "%s".', self.name)
            return

        if name not in self._states:
            self._report('Unknown state "%s" on controller "%s".', name, self.name)
            return

        if not self.is_same_state(state):
            self._perform_state_change(state)
        else:
            self._propagate_state(state)

        # Default states may have been filled in further down the chain;
        # mirror the refined full name unless a handler moved us elsewhere.
        current = self._current_state
        if self.registry.get_current() is state and current is not None and current.name == name:
            current.set_full_name(state.full_name)

    def _unwrap(self, state: State | Params | None) -> State | None:
        if state is None:
            return self.registry.get_current()
        if isinstance(state, State):
            return state
        if isinstance(state, Mapping) and isinstance(state.get(INFO_KEY), TransitionInfo):
            return state[INFO_KEY].new_state
        msg = (
            f'"{self.name}" can only be delegated a State or a parameter mapping '
            f"carrying transition info, got {type(state).__name__}"
        )
        raise TypeError(msg)

    def _fill_state_if_empty(self, state: State) -> None:
        default = self._default_state
        if default is None:
            return

        if state.name == default.name:
            _fill_in(state.params, default.params)
        elif not state.name:
            state.set_full_name(join_name(state.full_name, default.name))
            _fill_in(state.params, default.params)

    def _set_current_state(self, state: State) -> None:
        self._previous_state = self._current_state
        self._current_state = state.clone()

    def _perform_state_change(self, state: State) -> None:
        """Commit *state* and run the handler of its local name."""
        self._set_current_state(state)
        state.next()

        entry = self._states[self._current_state.name]
        logger.debug('"%s" handling state "%s"', self.name, entry.name)
        entry.handler(state.params)

    def _propagate_state(self, state: State) -> None:
        """Commit *state* and pass its remainder to the first suitable child."""
        self._set_current_state(state)
        state.next()

        name = state.name
        child = self._find_child(state)
        if child is None:
            if name:
                self._report('No child controller of "%s" declared the "%s" state.', self.name, name)
            return

        child.delegate_state(state)

    def _find_child(self, state: State) -> "Controller | None":
        name = state.name
        for child in self.children:
            if not isinstance(child, Controller):
                continue
            if not name:
                default = child._default_state
                if default is not None and self.registry.is_registered(
                    join_name(state.full_name, default.name)
                ):
                    return child
            elif name in child._states:
                return child
        return None

    def _report(self, msg: str, *args: Any) -> None:
        if self.registry.config.debug:
            logger.warning(msg, *args)
