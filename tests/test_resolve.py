"""Tests for Controller.resolve_full_state — absolute, relative and local names."""

import pytest

from waypoint.controller import Controller
from waypoint.errors import InvalidRelativeState
from waypoint.state.descriptor import INFO_KEY, State
from waypoint.state.registry import StateRegistry


class Root(Controller):
    default_state = "home"
    states = {"home": "noop", "articles": "noop"}

    def noop(self, params):
        pass


class Articles(Controller):
    default_state = {"name": "list", "params": {"page": 1}}
    states = {"list(page)": "noop", "edit(id)": "noop"}

    def noop(self, params):
        pass


class Pane(Controller):
    default_state = "home"
    states = {"home": "noop"}

    def noop(self, params):
        pass


@pytest.fixture
def tree(registry: StateRegistry) -> tuple[Root, Articles]:
    root = Root(registry)
    articles = root.link(Articles(registry))
    root.delegate_state(State("articles", {"lang": "en"}))
    return root, articles


class TestAbsolute:
    def test_strips_marker(self, tree) -> None:
        _, articles = tree
        resolved = articles.resolve_full_state("/foo.bar", {"x": 1})
        assert resolved.name is None
        assert resolved.full_name == "foo.bar"
        assert resolved.params == {"x": 1}

    def test_no_inheritance(self, tree) -> None:
        _, articles = tree
        assert articles.resolve_full_state("/foo.bar").params == {}


class TestRelative:
    def test_fails_at_root(self, tree) -> None:
        root, _ = tree
        with pytest.raises(InvalidRelativeState, match='"../x"'):
            root.resolve_full_state("../x")

    def test_fails_under_plain_joint(self, registry: StateRegistry) -> None:
        from waypoint.joint import Joint

        holder = Joint()
        pane = holder.link(Pane(registry))
        with pytest.raises(InvalidRelativeState):
            pane.resolve_full_state("../home")

    def test_resolved_by_parent_without_local_name(self, tree) -> None:
        _, articles = tree
        resolved = articles.resolve_full_state("../home")
        assert resolved.name is None
        assert resolved.full_name == "home"
        assert resolved.params == {"lang": "en"}

    def test_explicit_params_passed_up(self, tree) -> None:
        _, articles = tree
        resolved = articles.resolve_full_state("../home", {"lang": "fr"})
        assert resolved.params == {"lang": "fr"}


class TestLocal:
    def test_prefixed_by_ancestor(self, tree) -> None:
        _, articles = tree
        resolved = articles.resolve_full_state("edit", {"id": 4})
        assert resolved.name == "edit"
        assert resolved.full_name == "articles.edit"
        assert resolved.params == {"id": 4, "lang": "en"}

    def test_explicit_params_win(self, tree) -> None:
        _, articles = tree
        resolved = articles.resolve_full_state("edit", {"lang": "fr", "id": 4})
        assert resolved.params == {"lang": "fr", "id": 4}

    def test_inherits_own_current_params(self, tree) -> None:
        _, articles = tree
        articles.delegate_state(State("list", {"page": 3}))
        resolved = articles.resolve_full_state("edit")
        assert resolved.params == {"page": 3, "lang": "en"}

    def test_root_without_ancestors(self, registry: StateRegistry) -> None:
        root = Root(registry)
        resolved = root.resolve_full_state("articles", {"a": 1})
        assert resolved.full_name == "articles"
        assert resolved.params == {"a": 1}

    def test_walk_stops_at_ancestor_without_state(self, tree, registry: StateRegistry) -> None:
        _, articles = tree
        pane = articles.link(Pane(registry))
        resolved = pane.resolve_full_state("home")
        assert resolved.full_name == "home"
        assert resolved.params == {}

    def test_transition_info_not_inherited(self, registry: StateRegistry) -> None:
        registry.register("articles")
        root = Root(registry)
        articles = root.link(Articles(registry))
        registry.on_change(root.delegate_state)
        registry.set_current("articles", {"lang": "en"})

        assert INFO_KEY in root.current_state.params
        resolved = articles.resolve_full_state("edit")
        assert INFO_KEY not in resolved.params
        assert resolved.params == {"lang": "en"}


class TestDefault:
    def test_empty_name_maps_to_default(self, tree, registry: StateRegistry) -> None:
        root, _ = tree
        pane = root.link(Pane(registry))
        resolved = pane.resolve_full_state("")
        assert resolved.name == "home"
        assert resolved.full_name.endswith(".home")
        assert resolved.full_name == "articles.home"

    def test_default_params_fill(self, tree) -> None:
        _, articles = tree
        resolved = articles.resolve_full_state()
        assert resolved.name == "list"
        assert resolved.full_name == "articles.list"
        assert resolved.params == {"lang": "en", "page": 1}

    def test_default_params_do_not_override(self, tree) -> None:
        _, articles = tree
        assert articles.resolve_full_state("", {"page": 9}).params["page"] == 9

    def test_no_default_keeps_empty_name(self, tree, registry: StateRegistry) -> None:
        root, _ = tree

        class NoDefault(Controller):
            states = {"x": lambda params: None}

        ctrl = root.link(NoDefault(registry))
        resolved = ctrl.resolve_full_state("")
        assert resolved.name == ""
        assert resolved.full_name == "articles"
