"""Handler References - What a route points at and how it is resolved.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

SEPARATOR = "::"


class HandlerUnresolvable(LookupError):
    """A handler reference could not be turned into a callable.

    The router treats this the same as "no route matched".
    """

    def __init__(self, ref: "HandlerRef", reason: str):
        self.ref = ref
        self.reason = reason
        super().__init__(f"Cannot resolve handler {ref}: {reason}")


@dataclass(frozen=True)
class DirectHandler:
    """A function or other callable registered directly."""

    func: Callable[..., Any]

    def __str__(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))


@dataclass(frozen=True)
class NamedHandler:
    """A handler named by string.

    ``target`` is a controller class name when ``method`` is set
    (``"UserController::show"``), otherwise a dotted function path
    (``"app.views.index"``).
    """

    target: str
    method: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> "NamedHandler":
        """Parse ``Controller::method`` or a dotted function path."""
        value = value.strip()
        if SEPARATOR in value:
            target, method = value.split(SEPARATOR, 1)
            return cls(target=target.strip(), method=method.strip())
        return cls(target=value)

    def __str__(self) -> str:
        if self.method:
            return f"{self.target}{SEPARATOR}{self.method}"
        return self.target


HandlerRef = Union[DirectHandler, NamedHandler]


def as_handler_ref(handler: Any) -> HandlerRef:
    """Convert a registration argument into a HandlerRef."""
    if isinstance(handler, (DirectHandler, NamedHandler)):
        return handler
    if isinstance(handler, str):
        if not handler.strip():
            raise ValueError("Handler name must not be empty")
        return NamedHandler.parse(handler)
    if callable(handler):
        return DirectHandler(handler)
    raise TypeError(
        f"Handler must be callable or a string, got {type(handler).__name__}"
    )


class HandlerResolver(ABC):
    """Turns handler references into callables.

    Direct handlers resolve to themselves; named handlers are looked up by
    the concrete resolver, with ``namespace`` prefixed to every controller
    and function name.
    """

    def __init__(self, namespace: str = ""):
        self.namespace = namespace

    def resolve(self, ref: HandlerRef) -> Callable[..., Any]:
        """Resolve a reference, raising HandlerUnresolvable on failure."""
        if isinstance(ref, DirectHandler):
            return ref.func
        return self.resolve_named(ref)

    @abstractmethod
    def resolve_named(self, ref: NamedHandler) -> Callable[..., Any]:
        """Resolve a named reference."""
        pass

    def qualify(self, name: str) -> str:
        """Apply the namespace to a name."""
        if not self.namespace:
            return name
        namespace = self.namespace.rstrip(".")
        return f"{namespace}.{name}"


__all__ = [
    "DirectHandler",
    "HandlerRef",
    "HandlerResolver",
    "HandlerUnresolvable",
    "NamedHandler",
    "as_handler_ref",
]
