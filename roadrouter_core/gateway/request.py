"""Request/Response - Transport side of a dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from roadrouter_core.utils.config import RouterConfig
from roadrouter_core.utils.helpers import derive_base_path, get_header

_current_response: ContextVar["Response"] = ContextVar("current_response")
_current_request: ContextVar["RequestContext"] = ContextVar("current_request")


@dataclass
class RequestContext:
    """Everything the router needs from the transport.

    ``uri`` is the raw request URI (query string included); ``base_path``
    is stripped from its front before routing.
    """

    method: str
    uri: str
    headers: Dict[str, str] = field(default_factory=dict)
    base_path: str = "/"
    body: bytes = b""

    @property
    def is_head(self) -> bool:
        return self.method.upper() == "HEAD"

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        return get_header(self.headers, name, default)

    def resolve_method(self, config: Optional[RouterConfig] = None) -> str:
        """Method to route with.

        HEAD routes as GET. POST can be overridden through the override
        header to one of the configured methods.
        """
        config = config or RouterConfig()
        method = self.method.upper()

        if method == "HEAD" and config.head_as_get:
            return "GET"

        if method == "POST" and config.method_override:
            override = self.get_header(config.override_header).strip().upper()
            if override and override in config.override_methods:
                return override

        return method

    @classmethod
    def from_environ(
        cls,
        environ: Dict[str, Any],
        base_path: Optional[str] = None,
    ) -> "RequestContext":
        """Build from a WSGI environ."""
        script_name = environ.get("SCRIPT_NAME", "")
        uri = environ.get("REQUEST_URI") or environ.get("RAW_URI")
        if not uri:
            # WSGI strings carry raw bytes as latin-1
            raw_path = script_name + environ.get("PATH_INFO", "")
            uri = quote(raw_path.encode("latin-1"))
            query = environ.get("QUERY_STRING", "")
            if query:
                uri = f"{uri}?{query}"

        headers = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers[key[5:].replace("_", "-").title()] = value
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH") and value:
                headers[key.replace("_", "-").title()] = value

        if base_path is None:
            base_path = derive_base_path(script_name)

        body = b""
        length = headers.get("Content-Length", "")
        if length.isdigit() and int(length) > 0:
            body = environ["wsgi.input"].read(int(length))

        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            uri=uri,
            headers=headers,
            base_path=base_path,
            body=body,
        )


@dataclass
class Response:
    """HTTP Response object.

    Handlers write to the response of the request being dispatched,
    available through ``current_response()``.
    """

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    # Common status messages
    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        204: "No Content",
        301: "Moved Permanently",
        302: "Found",
        304: "Not Modified",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        500: "Internal Server Error",
    }

    @property
    def status_message(self) -> str:
        """Get status message."""
        return self.STATUS_MESSAGES.get(self.status, "Unknown")

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.status_message}"

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value."""
        self.headers[name] = value
        return self

    def write(self, data: Any) -> "Response":
        """Append text or bytes to the body."""
        if isinstance(data, str):
            data = data.encode()
        self.body += data
        return self

    def json(self, data: Any, status: Optional[int] = None) -> "Response":
        """Replace the body with JSON."""
        self.body = json.dumps(data).encode()
        self.headers["Content-Type"] = "application/json"
        if status is not None:
            self.status = status
        return self

    def redirect(self, location: str, status: int = 302) -> "Response":
        """Turn into a redirect."""
        self.status = status
        self.headers["Location"] = location
        return self

    def wsgi_headers(self) -> List[Tuple[str, str]]:
        """Header list for start_response."""
        headers = dict(self.headers)
        headers.setdefault("Content-Type", "text/html; charset=utf-8")
        headers["Content-Length"] = str(len(self.body))
        return list(headers.items())


def current_response() -> Response:
    """Response of the request being dispatched."""
    try:
        return _current_response.get()
    except LookupError:
        raise RuntimeError("No request is being dispatched") from None


def current_request() -> RequestContext:
    """Request being dispatched."""
    try:
        return _current_request.get()
    except LookupError:
        raise RuntimeError("No request is being dispatched") from None


__all__ = [
    "RequestContext",
    "Response",
    "current_request",
    "current_response",
]
