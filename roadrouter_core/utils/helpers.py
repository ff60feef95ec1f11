"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple, Union
from urllib.parse import unquote

ALL_METHODS: Tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD")

Methods = Union[str, Iterable[str]]


def split_methods(methods: Methods) -> Tuple[str, ...]:
    """Normalize a method list into verb tokens.

    Accepts ``"GET|POST"``, an iterable of verbs, or ``"*"`` for every verb
    in ALL_METHODS. Duplicates are dropped, order is kept.
    """
    if isinstance(methods, str):
        tokens = methods.split("|")
    else:
        tokens = list(methods)

    result = []
    for token in tokens:
        token = token.strip().upper()
        if not token:
            raise ValueError(f"Empty HTTP method in {methods!r}")
        expanded = ALL_METHODS if token == "*" else (token,)
        for method in expanded:
            if method not in result:
                result.append(method)

    if not result:
        raise ValueError("At least one HTTP method is required")
    return tuple(result)


def join_pattern(prefix: str, pattern: str) -> str:
    """Join a mount prefix and a route pattern.

    ``("/api", "/users/")`` gives ``"/api/users"`` and ``("/api", "/")``
    gives ``"/api"``. Without a prefix the result always starts with a
    slash, so ``("", "/")`` stays ``"/"``.
    """
    joined = prefix + "/" + pattern.strip("/")
    if prefix:
        joined = joined.rstrip("/")
    return joined


def normalize_path(uri: str, base_path: str = "/") -> str:
    """Turn a raw request URI into a routable path.

    Decodes percent escapes, strips the base path and the query string,
    and returns the path with one leading slash and no trailing slash.
    The mount root itself (``/app`` for base path ``/app/``) routes to
    ``/``.
    """
    path = unquote(uri or "")

    if "?" in path:
        path = path[:path.index("?")]

    if base_path:
        if path.startswith(base_path):
            path = path[len(base_path):]
        elif path == base_path.rstrip("/"):
            path = ""

    return "/" + path.strip("/")


def derive_base_path(script_name: Optional[str]) -> str:
    """Base path from the application mount point (WSGI ``SCRIPT_NAME``).

    ``/app`` and ``/app/`` give ``/app/``; an empty mount point gives ``/``.
    """
    if not script_name:
        return "/"
    return script_name.rstrip("/") + "/"


def get_header(headers: Dict[str, str], name: str, default: str = "") -> str:
    """Get header value (case-insensitive)."""
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return default


__all__ = [
    "ALL_METHODS",
    "Methods",
    "derive_base_path",
    "get_header",
    "join_pattern",
    "normalize_path",
    "split_methods",
]
