"""Waypoint exception hierarchy.

Shared across the registry, the descriptor and every controller so each
module raises and catches the same types.

Structural declaration problems (bad state names, broken defaults,
dangling handler references) are ``ConfigurationError`` subclasses and
always stop controller construction. Runtime delegation problems are
never raised; controllers report them through the ``waypoint.controller``
logger instead.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when a controller or registry declaration is invalid.

    Typically raised while a controller is being constructed.
    """


class InvalidStateName(ConfigurationError):  # noqa: N818 — reads as a condition
    """A state name has an invalid format, or a local name contains a dot."""


class InvalidDefaultState(ConfigurationError):  # noqa: N818 — reads as a condition
    """The default state is empty or points to an undeclared state."""


class UnresolvedHandler(ConfigurationError):  # noqa: N818 — reads as a condition
    """A state handler references something that is not callable."""


class InvalidRelativeState(ConfigurationError):  # noqa: N818 — reads as a condition
    """A ``../`` state was resolved on a controller without a controller parent."""


class UnknownState(WaypointError):  # noqa: N818 — reads as a condition
    """A URL was requested for a state the registry does not know."""


class UrlBuildError(WaypointError):
    """A URL could not be built from the supplied state parameters."""
