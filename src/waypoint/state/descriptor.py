"""State descriptor — one named position in the application.

A descriptor carries a dotted *full name* (``"articles.edit"``), a
parameter mapping, and a cursor pointing at the segment owned by the
controller currently looking at it. Controllers advance the cursor as a
descriptor travels down the tree, so ``name`` always reads as the local
name for whoever holds it next.
"""

from dataclasses import dataclass
from typing import Any

from waypoint._internal.types import Params

SEPARATOR = "."

# Reserved parameter key holding the TransitionInfo envelope
INFO_KEY = "$info"


@dataclass(frozen=True, slots=True)
class TransitionInfo:
    """The transition a parameter mapping belongs to.

    Stored under ``params["$info"]``. Lets a handler pass its params
    straight to a child's ``delegate_state()`` and have the child work on
    the very descriptor being delegated.
    """

    new_state: "State"
    previous_state: "State | None" = None


def join_name(*parts: str) -> str:
    """Join name segments with the separator, skipping empty ones."""
    return SEPARATOR.join(part for part in parts if part)


class State:
    """A state descriptor.

    Usage::

        state = State("articles.edit", {"id": 3})
        state.name        # "articles"
        state.next()
        state.name        # "edit"
    """

    __slots__ = ("_cursor", "_full_name", "_names", "_params")

    def __init__(self, full_name: str = "", params: Params | None = None) -> None:
        self._cursor = 0
        self._full_name = ""
        self._names: list[str] = []
        self._params: dict[str, Any] = {}
        self.set_full_name(full_name)
        self.set_params(params)

    @property
    def name(self) -> str:
        """Local name under the cursor, or ``""`` once the cursor ran past the end."""
        if self._cursor < len(self._names):
            return self._names[self._cursor]
        return ""

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def params(self) -> dict[str, Any]:
        return self._params

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_full_name(self, full_name: str) -> None:
        """Replace the full name. The cursor keeps its index."""
        self._full_name = full_name or ""
        self._names = [part for part in self._full_name.split(SEPARATOR) if part]

    def set_params(self, params: Params | None) -> None:
        self._params = dict(params) if params else {}

    def next(self) -> "State":
        """Advance the cursor by one segment."""
        if self._cursor < len(self._names):
            self._cursor += 1
        return self

    def seek_to(self, name: str) -> "State":
        """Move the cursor to the first segment named *name*.

        Leaves the cursor untouched if no segment matches.
        """
        try:
            self._cursor = self._names.index(name)
        except ValueError:
            pass
        return self

    def is_equal(self, other: "State", keys: tuple[str, ...] | list[str] = ()) -> bool:
        """Compare the path up to the cursor and the values of *keys* only.

        An empty *keys* means the parameters are irrelevant.
        """
        if self._names[: self._cursor + 1] != other._names[: other._cursor + 1]:
            return False
        return all(
            self._params.get(key) == other._params.get(key)
            for key in keys
            if key != INFO_KEY
        )

    def is_fully_equal(self, other: "State") -> bool:
        """Compare full names and every parameter except the transition envelope."""
        if self._full_name != other._full_name:
            return False
        return public_params(self._params) == public_params(other._params)

    def clone(self) -> "State":
        """Return an independent copy with the same cursor position."""
        copy = State(self._full_name, self._params)
        copy._cursor = self._cursor
        return copy

    def __repr__(self) -> str:
        return f"<State {self._full_name!r} at {self.name!r} params={public_params(self._params)!r}>"


def public_params(params: Params) -> dict[str, Any]:
    """Return *params* without the transition envelope."""
    return {key: value for key, value in params.items() if key != INFO_KEY}
