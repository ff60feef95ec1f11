"""Handler Resolvers - Look up named handlers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from typing import Any, Callable, Dict, Optional

from roadrouter_core.handlers.base import (
    HandlerResolver,
    HandlerUnresolvable,
    NamedHandler,
)

logger = logging.getLogger(__name__)


def bind_method(ref: NamedHandler, controller: type, method: str) -> Callable[..., Any]:
    """Get a callable for ``controller.method``.

    Static and class methods are returned from the class itself. Plain
    methods are bound to a new instance, so the controller must be
    constructible without arguments.
    """
    if method.startswith("_"):
        raise HandlerUnresolvable(ref, f"method {method!r} is not public")

    try:
        raw = inspect.getattr_static(controller, method)
    except AttributeError:
        raise HandlerUnresolvable(
            ref, f"{controller.__name__} has no method {method!r}"
        ) from None

    if getattr(raw, "__isabstractmethod__", False):
        raise HandlerUnresolvable(ref, f"method {method!r} is abstract")

    if isinstance(raw, (staticmethod, classmethod)):
        return getattr(controller, method)

    if not callable(raw):
        raise HandlerUnresolvable(ref, f"{method!r} is not callable")

    return getattr(controller(), method)


class ImportResolver(HandlerResolver):
    """Resolve named handlers by importing them.

    Usage:
        resolver = ImportResolver(namespace="app.controllers")
        resolver.resolve(NamedHandler.parse("users.UserController::show"))
        # -> app.controllers.users.UserController().show
    """

    def resolve_named(self, ref: NamedHandler) -> Callable[..., Any]:
        """Import the module and look up the class or function."""
        qualified = self.qualify(ref.target)
        module_name, _, attr_name = qualified.rpartition(".")
        if not module_name:
            raise HandlerUnresolvable(ref, f"{qualified!r} has no module path")

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise HandlerUnresolvable(ref, f"cannot import {module_name}: {e}") from e

        target = getattr(module, attr_name, None)
        if target is None:
            raise HandlerUnresolvable(ref, f"{module_name} has no {attr_name!r}")

        logger.debug(f"Resolved {ref} via {qualified}")

        if ref.method:
            if not isinstance(target, type):
                raise HandlerUnresolvable(ref, f"{qualified!r} is not a class")
            return bind_method(ref, target, ref.method)

        if not callable(target):
            raise HandlerUnresolvable(ref, f"{qualified!r} is not callable")
        return target


class RegistryResolver(HandlerResolver):
    """Resolve named handlers from explicitly registered objects.

    Names are looked up as given first, then with the namespace applied.
    """

    def __init__(
        self,
        controllers: Optional[Dict[str, type]] = None,
        functions: Optional[Dict[str, Callable[..., Any]]] = None,
        namespace: str = "",
    ):
        super().__init__(namespace)
        self._controllers: Dict[str, type] = dict(controllers or {})
        self._functions: Dict[str, Callable[..., Any]] = dict(functions or {})

    def register_controller(self, controller: type, name: Optional[str] = None) -> "RegistryResolver":
        """Register a controller class."""
        self._controllers[name or controller.__name__] = controller
        return self

    def register_function(
        self,
        func: Callable[..., Any],
        name: Optional[str] = None,
    ) -> "RegistryResolver":
        """Register a plain function."""
        self._functions[name or func.__name__] = func
        return self

    def resolve_named(self, ref: NamedHandler) -> Callable[..., Any]:
        """Look up the controller or function by name."""
        registry: Dict[str, Any] = self._controllers if ref.method else self._functions
        target = registry.get(ref.target)
        if target is None:
            target = registry.get(self.qualify(ref.target))
        if target is None:
            raise HandlerUnresolvable(ref, f"{ref.target!r} is not registered")

        if ref.method:
            return bind_method(ref, target, ref.method)
        return target


__all__ = [
    "ImportResolver",
    "RegistryResolver",
    "bind_method",
]
