"""Waypoint — hierarchical navigation state for trees of UI controllers.

Controllers each own one segment of a dotted state name. A single
registry holds the current state; delegating it walks the controller
tree until the controller whose segment changed runs its handler.

Basic usage::

    from waypoint import Controller, StateRegistry

    class App(Controller):
        default_state = "home"
        states = {"home": "show_home", "article(id)": "show_article"}

        def show_home(self, params): ...
        def show_article(self, params): ...

    registry = StateRegistry()
    registry.register("home")
    registry.register("article", "/articles/{id:int}")

    app = App(registry)
    registry.on_change(app.delegate_state)
    registry.set_current("article", {"id": 7})
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "Controller",
    "DefaultState",
    "InvalidDefaultState",
    "InvalidRelativeState",
    "InvalidStateName",
    "Joint",
    "NavigationConfig",
    "State",
    "StateRegistry",
    "TransitionInfo",
    "UnknownState",
    "UnresolvedHandler",
    "UrlBuildError",
    "WaypointError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name in ("Controller", "DefaultState"):
        from waypoint import controller as _controller

        return getattr(_controller, name)

    if name in ("State", "StateRegistry", "TransitionInfo"):
        from waypoint import state as _state

        return getattr(_state, name)

    if name == "NavigationConfig":
        from waypoint.config import NavigationConfig

        return NavigationConfig

    if name == "Joint":
        from waypoint.joint import Joint

        return Joint

    if name in (
        "ConfigurationError",
        "InvalidDefaultState",
        "InvalidRelativeState",
        "InvalidStateName",
        "UnknownState",
        "UnresolvedHandler",
        "UrlBuildError",
        "WaypointError",
    ):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
