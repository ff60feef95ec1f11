"""Gateway module - WSGI transport for the router."""

from roadrouter_core.gateway.request import (
    RequestContext,
    Response,
    current_request,
    current_response,
)
from roadrouter_core.gateway.server import RouterApp, serve

__all__ = [
    "RequestContext",
    "Response",
    "RouterApp",
    "current_request",
    "current_response",
    "serve",
]
