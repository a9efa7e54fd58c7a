"""Tests for waypoint.state.descriptor — the State descriptor."""

from waypoint.state.descriptor import INFO_KEY, State, TransitionInfo, join_name, public_params


class TestCursor:
    def test_name_is_first_segment(self) -> None:
        state = State("articles.edit")
        assert state.name == "articles"
        assert state.full_name == "articles.edit"

    def test_next_advances(self) -> None:
        state = State("articles.edit")
        assert state.next() is state
        assert state.name == "edit"

    def test_next_past_end_gives_empty_name(self) -> None:
        state = State("articles").next()
        assert state.name == ""
        state.next()
        assert state.cursor == 1

    def test_empty_state(self) -> None:
        state = State()
        assert state.name == ""
        assert state.full_name == ""
        assert state.params == {}

    def test_set_full_name_keeps_cursor(self) -> None:
        state = State("list").next()
        state.set_full_name("list.active")
        assert state.name == "active"

    def test_seek_to(self) -> None:
        state = State("app.articles.edit")
        assert state.seek_to("edit") is state
        assert state.name == "edit"

    def test_seek_to_missing_keeps_cursor(self) -> None:
        state = State("app.articles").next()
        state.seek_to("nope")
        assert state.name == "articles"


class TestEquality:
    def test_path_only_when_no_keys(self) -> None:
        assert State("list", {"page": 1}).is_equal(State("list", {"page": 2}))

    def test_different_name(self) -> None:
        assert not State("list").is_equal(State("edit"))

    def test_relevant_keys_compared(self) -> None:
        a = State("edit", {"id": 1, "tab": "x"})
        assert a.is_equal(State("edit", {"id": 1, "tab": "y"}), ["id"])
        assert not a.is_equal(State("edit", {"id": 2, "tab": "x"}), ["id"])

    def test_missing_key_on_both_sides_is_equal(self) -> None:
        assert State("edit").is_equal(State("edit"), ["id"])

    def test_only_path_up_to_cursor_matters(self) -> None:
        parent_view = State("articles.list")
        other = State("articles.edit")
        assert parent_view.is_equal(other)
        assert not parent_view.clone().next().is_equal(other.clone().next())

    def test_fully_equal_ignores_info(self) -> None:
        a = State("home", {"q": "x"})
        b = State("home", {"q": "x"})
        b.params[INFO_KEY] = TransitionInfo(new_state=b)
        assert a.is_fully_equal(b)
        assert not a.is_fully_equal(State("home", {"q": "y"}))
        assert not a.is_fully_equal(State("home.sub", {"q": "x"}))


class TestClone:
    def test_clone_is_independent(self) -> None:
        state = State("articles.edit", {"id": 1})
        copy = state.clone()
        copy.params["id"] = 2
        copy.set_full_name("other")
        assert state.params == {"id": 1}
        assert state.full_name == "articles.edit"

    def test_clone_keeps_cursor(self) -> None:
        state = State("articles.edit").next()
        assert state.clone().name == "edit"


class TestHelpers:
    def test_join_name_skips_empty(self) -> None:
        assert join_name("", "home") == "home"
        assert join_name("list", "") == "list"
        assert join_name("a", "b", "c") == "a.b.c"

    def test_public_params_strips_info(self) -> None:
        state = State("x")
        assert public_params({"a": 1, INFO_KEY: TransitionInfo(new_state=state)}) == {"a": 1}
