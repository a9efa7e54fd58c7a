"""Navigation configuration.

NavigationConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NavigationConfig:
    """Navigation configuration. Immutable after creation.

    Passed to :class:`~waypoint.state.registry.StateRegistry`; every
    controller wired to that registry reads it from there::

        registry = StateRegistry(NavigationConfig(debug=True))
    """

    # Report non-fatal delegation diagnostics (unknown state, no default,
    # unhandled state). Never changes which outcomes raise.
    debug: bool = False

    # Deepest controller hop a single delegation may reach
    max_depth: int = 64

    # Prefix for URLs generated with absolute=True
    base_url: str = ""
