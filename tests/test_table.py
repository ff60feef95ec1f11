"""Route table and mount tests."""

import pytest
from roadrouter_core.routing.table import Mounter, Phase, RouteTable
from roadrouter_core.utils.helpers import ALL_METHODS, join_pattern, split_methods


def handler():
    pass


class TestSplitMethods:
    """Test method normalization."""

    def test_pipe_delimited(self):
        """Test "GET|POST" strings."""
        assert split_methods("GET|POST") == ("GET", "POST")

    def test_iterable_and_case(self):
        """Test iterables are upper-cased."""
        assert split_methods(["get", "Put"]) == ("GET", "PUT")

    def test_wildcard_expands(self):
        """Test "*" expands to every verb."""
        assert split_methods("*") == ALL_METHODS
        assert set(ALL_METHODS) == {"GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"}

    def test_duplicates_dropped(self):
        """Test repeated verbs appear once."""
        assert split_methods("GET|GET|POST") == ("GET", "POST")

    def test_empty_token(self):
        """Test empty tokens are rejected."""
        with pytest.raises(ValueError):
            split_methods("GET||POST")


class TestJoinPattern:
    """Test prefix joining."""

    def test_top_level(self):
        """Test no prefix."""
        assert join_pattern("", "/users/") == "/users"
        assert join_pattern("", "/") == "/"
        assert join_pattern("", "users") == "/users"

    def test_with_prefix(self):
        """Test trailing slash removed under a prefix."""
        assert join_pattern("/api", "/users/") == "/api/users"
        assert join_pattern("/api", "/") == "/api"


class TestMounter:
    """Test mount scopes."""

    def test_nested_mounts_compose(self):
        """Test /api + /v1 gives /api/v1."""
        mounter = Mounter()
        seen = []

        def inner():
            seen.append(mounter.effective_pattern("/users"))

        def outer():
            mounter.mount("/v1", inner)
            seen.append(mounter.effective_pattern("/status"))

        mounter.mount("/api", outer)
        seen.append(mounter.effective_pattern("/"))

        assert seen == ["/api/v1/users", "/api/status", "/"]
        assert mounter.prefix == ""

    def test_scope_restored_on_error(self):
        """Test the prefix is restored when the body raises."""
        mounter = Mounter()

        def body():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            mounter.mount("/api", body)

        assert mounter.prefix == ""

    def test_context_manager(self):
        """Test scope() as a context manager."""
        mounter = Mounter()
        with mounter.scope("/api") as prefix:
            assert prefix == "/api"
            assert mounter.effective_pattern("/x") == "/api/x"
        assert mounter.prefix == ""


class TestRouteTable:
    """Test route storage."""

    def test_register_per_method(self):
        """Test one entry per method."""
        table = RouteTable()
        entry = table.register("GET|POST", "/users", handler)

        assert table.entries(Phase.AFTER, "GET") == (entry,)
        assert table.entries(Phase.AFTER, "POST") == (entry,)
        assert table.entries(Phase.AFTER, "PUT") == ()

    def test_wildcard_never_stored(self):
        """Test "*" is expanded at registration."""
        table = RouteTable()
        table.register("*", "/x", handler, Phase.BEFORE)

        assert "*" not in table.methods(Phase.BEFORE)
        assert sorted(table.methods(Phase.BEFORE)) == sorted(ALL_METHODS)

    def test_order_preserved(self):
        """Test registration order is kept."""
        table = RouteTable()
        first = table.register("GET", "/a", handler)
        second = table.register("GET", "/b", handler)
        assert table.entries(Phase.AFTER, "GET") == (first, second)

    def test_phases_are_separate(self):
        """Test before and after tables do not mix."""
        table = RouteTable()
        table.register("GET", "/a", handler, Phase.BEFORE)
        assert table.entries(Phase.AFTER, "GET") == ()
        assert len(table) == 1

    def test_entry_is_compiled(self):
        """Test entries carry their compiled rule."""
        entry = RouteTable().register("GET", "/users/{id}", handler)
        assert entry.rule.pattern == "/users/{id}"
        assert entry.rule.group_count == 1

    def test_invalid_handler(self):
        """Test non-callable handlers are rejected."""
        with pytest.raises(TypeError):
            RouteTable().register("GET", "/a", 42)
