"""Handlers module - Handler references and resolution."""

from roadrouter_core.handlers.base import (
    DirectHandler,
    HandlerRef,
    HandlerResolver,
    HandlerUnresolvable,
    NamedHandler,
    as_handler_ref,
)
from roadrouter_core.handlers.resolver import ImportResolver, RegistryResolver

__all__ = [
    "DirectHandler",
    "HandlerRef",
    "HandlerResolver",
    "HandlerUnresolvable",
    "ImportResolver",
    "NamedHandler",
    "RegistryResolver",
    "as_handler_ref",
]
