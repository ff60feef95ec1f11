"""Router - Request routing engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ContextManager, List, Optional, Tuple

from roadrouter_core.handlers.base import HandlerResolver
from roadrouter_core.handlers.resolver import ImportResolver
from roadrouter_core.routing.dispatcher import DispatchResult, Dispatcher
from roadrouter_core.routing.matcher import PatternCompiler
from roadrouter_core.routing.notfound import FallbackEntry, NotFoundHandler
from roadrouter_core.routing.table import Mounter, Phase, RouteEntry, RouteTable
from roadrouter_core.utils.config import RouterConfig
from roadrouter_core.utils.helpers import ALL_METHODS, Methods, normalize_path

logger = logging.getLogger(__name__)


class Router:
    """Request Router.

    Features:
    - Regex route patterns with positional {placeholders}
    - Before middleware (all matches run)
    - Routes (first match runs)
    - Nested mounting under path prefixes
    - Pattern-keyed 404 fallbacks
    - Named handlers ("Controller::method")

    Usage:
        router = Router()
        router.before("GET|POST", "/admin/.*", require_login)
        router.get("/users/{id}", show_user)

        def api():
            router.get("/status", "StatusController::show")

        router.mount("/api", api)
        router.set_not_found(render_404)

        router.run("GET", "/users/42")
    """

    def __init__(
        self,
        config: Optional[RouterConfig] = None,
        resolver: Optional[HandlerResolver] = None,
        compiler: Optional[PatternCompiler] = None,
    ):
        self.config = config or RouterConfig()
        self.resolver = resolver or ImportResolver(namespace=self.config.namespace)
        self._table = RouteTable(compiler)
        self._mounter = Mounter()
        self._not_found = NotFoundHandler(self._table.compiler)
        self._dispatcher = Dispatcher(self._table, self._not_found, self.resolver)
        self._base_path = self.config.base_path

    # Registration

    def before(self, methods: Methods, pattern: str, handler: Any = None) -> Any:
        """Add before middleware.

        Every before entry matching a request runs, in registration order,
        ahead of the routes. Without ``handler`` this returns a decorator.
        """
        return self._register(Phase.BEFORE, methods, pattern, handler)

    def match(self, methods: Methods, pattern: str, handler: Any = None) -> Any:
        """Add a route for one or more methods (``"GET|POST"``, ``"*"``)."""
        return self._register(Phase.AFTER, methods, pattern, handler)

    def all(self, pattern: str, handler: Any = None) -> Any:
        """Add route for every method."""
        return self.match(ALL_METHODS, pattern, handler)

    def get(self, pattern: str, handler: Any = None) -> Any:
        """Add GET route."""
        return self.match("GET", pattern, handler)

    def post(self, pattern: str, handler: Any = None) -> Any:
        """Add POST route."""
        return self.match("POST", pattern, handler)

    def put(self, pattern: str, handler: Any = None) -> Any:
        """Add PUT route."""
        return self.match("PUT", pattern, handler)

    def delete(self, pattern: str, handler: Any = None) -> Any:
        """Add DELETE route."""
        return self.match("DELETE", pattern, handler)

    def patch(self, pattern: str, handler: Any = None) -> Any:
        """Add PATCH route."""
        return self.match("PATCH", pattern, handler)

    def options(self, pattern: str, handler: Any = None) -> Any:
        """Add OPTIONS route."""
        return self.match("OPTIONS", pattern, handler)

    def mount(self, prefix: str, body: Callable[[], Any]) -> None:
        """Register everything ``body`` registers under ``prefix``.

        Mounts nest; the previous prefix is restored even if body raises.
        """
        self._mounter.mount(prefix, body)

    def scope(self, prefix: str) -> ContextManager[str]:
        """Context manager form of mount()."""
        return self._mounter.scope(prefix)

    def _register(self, phase: Phase, methods: Methods, pattern: str, handler: Any) -> Any:
        if handler is None:
            # decorator form: capture the prefix now, not when decorated
            effective = self._mounter.effective_pattern(pattern)

            def decorator(func: Callable) -> Callable:
                self._table.register(methods, effective, func, phase)
                return func

            return decorator

        return self._table.register(
            methods,
            self._mounter.effective_pattern(pattern),
            handler,
            phase,
        )

    # Not found

    def set_not_found(self, pattern_or_handler: Any, handler: Any = None) -> FallbackEntry:
        """Set the 404 handler.

        ``set_not_found(fn)`` sets the default; ``set_not_found(pattern, fn)``
        sets a fallback for requests matching pattern.
        """
        return self._not_found.set(pattern_or_handler, handler)

    set404 = set_not_found

    def trigger_not_found(self, path: str) -> bool:
        """Run the 404 protocol for path; False when nothing handled it."""
        outcome = self._not_found.trigger(path, self.resolver.resolve)
        return not outcome.not_found

    # Settings

    def set_namespace(self, namespace: str) -> None:
        """Set the default namespace for named handlers."""
        if isinstance(namespace, str):
            self.resolver.namespace = namespace

    def get_namespace(self) -> str:
        return self.resolver.namespace

    def set_base_path(self, base_path: Optional[str]) -> None:
        """Set the prefix stripped from every request URI.

        ``None`` lets the transport derive it from the mount point.
        """
        self._base_path = base_path

    def get_base_path(self, default: Optional[str] = "/") -> Optional[str]:
        """Configured base path, or default when none was set."""
        if self._base_path is None:
            return default
        return self._base_path

    # Execution

    def current_path(self, uri: str, base_path: Optional[str] = None) -> str:
        """Routable path for a raw request URI."""
        if base_path is None:
            base_path = self.get_base_path()
        return normalize_path(uri, base_path)

    def dispatch(
        self,
        method: str,
        uri: str,
        callback: Optional[Callable[[], Any]] = None,
        base_path: Optional[str] = None,
    ) -> DispatchResult:
        """Dispatch a request.

        Args:
            method: Resolved HTTP method (overrides already applied)
            uri: Raw request URI, query string allowed
            callback: Called with no arguments after a route ran
            base_path: Override the router's base path

        Returns:
            DispatchResult
        """
        path = self.current_path(uri, base_path)
        return self._dispatcher.dispatch(method, path, callback)

    def run(
        self,
        method: str,
        uri: str,
        callback: Optional[Callable[[], Any]] = None,
        base_path: Optional[str] = None,
    ) -> bool:
        """Dispatch a request; True if a route handled it."""
        return self.dispatch(method, uri, callback, base_path).handled

    # Introspection

    def get_routes(self, phase: Phase = Phase.AFTER) -> List[Tuple[str, RouteEntry]]:
        """All (method, entry) pairs in evaluation order."""
        routes = []
        for method in self._table.methods(phase):
            for entry in self._table.entries(phase, method):
                routes.append((method, entry))
        return routes

    def get_not_found(self) -> List[FallbackEntry]:
        """Keyed fallbacks followed by the default, if set."""
        entries = self._not_found.entries()
        if self._not_found.default is not None:
            entries.append(self._not_found.default)
        return entries

    def get_stats(self) -> dict:
        """Get router statistics."""
        return {
            "routes": len(self.get_routes(Phase.AFTER)),
            "before": len(self.get_routes(Phase.BEFORE)),
            "fallbacks": len(self._not_found),
            "patterns_compiled": len(self._table.compiler),
        }


__all__ = [
    "Router",
]
