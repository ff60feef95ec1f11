"""Handler resolution tests."""

from abc import ABC, abstractmethod
from collections import OrderedDict

import pytest
from roadrouter_core.handlers.base import (
    DirectHandler,
    HandlerUnresolvable,
    NamedHandler,
    as_handler_ref,
)
from roadrouter_core.handlers.resolver import ImportResolver, RegistryResolver
from roadrouter_core.routing.router import Router

CALLS = []


class ArticleController:
    """Controller used through ImportResolver."""

    def show(self, slug):
        CALLS.append(("show", slug))

    @staticmethod
    def index():
        CALLS.append(("index",))

    @classmethod
    def latest(cls):
        CALLS.append(("latest", cls.__name__))

    def _internal(self):
        pass

    title = "not a method"


class AbstractController(ABC):
    @abstractmethod
    def handle(self):
        pass


def article_feed():
    CALLS.append(("feed",))


@pytest.fixture(autouse=True)
def reset_calls():
    CALLS.clear()
    yield
    CALLS.clear()


class TestHandlerRefs:
    """Test handler reference parsing."""

    def test_callable(self):
        """Test callables become direct handlers."""
        ref = as_handler_ref(article_feed)
        assert ref == DirectHandler(article_feed)

    def test_controller_method(self):
        """Test "Controller::method" strings."""
        ref = as_handler_ref("ArticleController::show")
        assert ref == NamedHandler(target="ArticleController", method="show")
        assert str(ref) == "ArticleController::show"

    def test_function_path(self):
        """Test dotted function paths."""
        ref = as_handler_ref("app.views.index")
        assert ref == NamedHandler(target="app.views.index")
        assert ref.method is None

    def test_refs_pass_through(self):
        """Test existing refs are kept."""
        ref = NamedHandler("X", "y")
        assert as_handler_ref(ref) is ref

    def test_rejects_other_types(self):
        """Test invalid handlers."""
        with pytest.raises(TypeError):
            as_handler_ref(None)
        with pytest.raises(ValueError):
            as_handler_ref("  ")


class TestImportResolver:
    """Test resolving by import."""

    def test_direct_handler(self):
        """Test direct handlers resolve to themselves."""
        assert ImportResolver().resolve(DirectHandler(article_feed)) is article_feed

    def test_instance_method(self):
        """Test instance methods are bound to a new controller."""
        resolver = ImportResolver(namespace=__name__)
        resolver.resolve(NamedHandler("ArticleController", "show"))("intro")
        assert CALLS == [("show", "intro")]

    def test_static_and_class_methods(self):
        """Test static and class methods are called on the class."""
        resolver = ImportResolver(namespace=__name__)
        resolver.resolve(NamedHandler("ArticleController", "index"))()
        resolver.resolve(NamedHandler("ArticleController", "latest"))()
        assert CALLS == [("index",), ("latest", "ArticleController")]

    def test_function_path(self):
        """Test dotted function paths."""
        resolver = ImportResolver()
        assert resolver.resolve(NamedHandler(f"{__name__}.article_feed")) is article_feed

    def test_stdlib_class_method(self):
        """Test a fully qualified controller without namespace."""
        handler = ImportResolver().resolve(NamedHandler("collections.OrderedDict", "fromkeys"))
        assert handler("ab") == OrderedDict.fromkeys("ab")

    @pytest.mark.parametrize(
        "ref",
        [
            NamedHandler("MissingController", "show"),
            NamedHandler("ArticleController", "missing"),
            NamedHandler("ArticleController", "_internal"),
            NamedHandler("ArticleController", "title"),
            NamedHandler("AbstractController", "handle"),
            NamedHandler("article_feed", "show"),
        ],
    )
    def test_unresolvable(self, ref):
        """Test lookup failures raise HandlerUnresolvable."""
        with pytest.raises(HandlerUnresolvable) as exc_info:
            ImportResolver(namespace=__name__).resolve(ref)
        assert exc_info.value.ref == ref

    def test_unimportable_module(self):
        """Test missing modules are unresolvable."""
        with pytest.raises(HandlerUnresolvable):
            ImportResolver().resolve(NamedHandler("no_such_package.views.index"))

    def test_no_module_path(self):
        """Test bare names without namespace are unresolvable."""
        with pytest.raises(HandlerUnresolvable):
            ImportResolver().resolve(NamedHandler("ArticleController", "show"))


class TestRegistryResolver:
    """Test resolving from a registry."""

    def test_registered_controller(self):
        """Test controllers registered by class name."""
        resolver = RegistryResolver().register_controller(ArticleController)
        resolver.resolve(NamedHandler("ArticleController", "show"))("x")
        assert CALLS == [("show", "x")]

    def test_registered_function(self):
        """Test functions registered under a name."""
        resolver = RegistryResolver().register_function(article_feed, name="feed")
        assert resolver.resolve(NamedHandler("feed")) is article_feed

    def test_namespace_lookup(self):
        """Test names are retried with the namespace."""
        resolver = RegistryResolver(
            controllers={"blog.ArticleController": ArticleController},
            namespace="blog",
        )
        resolver.resolve(NamedHandler("ArticleController", "index"))()
        assert CALLS == [("index",)]

    def test_unregistered(self):
        """Test unknown names are unresolvable."""
        with pytest.raises(HandlerUnresolvable):
            RegistryResolver().resolve(NamedHandler("Nope", "show"))


class TestRouterWithNamedHandlers:
    """Test named handlers through the router."""

    def test_namespace_applies(self):
        """Test the router namespace reaches the resolver."""
        router = Router()
        router.set_namespace(__name__)
        router.get("/articles/{slug}", "ArticleController::show")
        router.get("/feed", "article_feed")

        assert router.run("GET", "/articles/hello")
        assert router.run("GET", "/feed")
        assert CALLS == [("show", "hello"), ("feed",)]
