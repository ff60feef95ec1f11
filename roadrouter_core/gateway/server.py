"""Router Server - WSGI front end for a Router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional
from wsgiref.simple_server import make_server

from roadrouter_core.gateway.request import (
    RequestContext,
    Response,
    _current_request,
    _current_response,
)
from roadrouter_core.routing.dispatcher import DispatchResult
from roadrouter_core.routing.router import Router
from roadrouter_core.utils.config import RouterConfig, configure_logging

logger = logging.getLogger(__name__)

StartResponse = Callable[..., Any]


class RouterApp:
    """WSGI application dispatching through a Router.

    Handlers write their output to ``current_response()``. A request that
    no route and no fallback handled gets ``404 Not Found``; a handler
    that raises gets ``500``. HEAD requests are routed as GET and sent
    without a body.

    Usage:
        router = Router()
        router.get("/hello/{name}", lambda name: current_response().write(f"Hi {name}"))

        app = RouterApp(router)
        serve(app, port=8080)
    """

    def __init__(
        self,
        router: Router,
        config: Optional[RouterConfig] = None,
        base_path: Optional[str] = None,
    ):
        self.router = router
        self.config = config or router.config
        self.base_path = base_path

    def __call__(self, environ: Dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        # explicit app base path, then the router's, then SCRIPT_NAME
        base_path = self.base_path
        if base_path is None:
            base_path = self.router.get_base_path(default=None)

        request = RequestContext.from_environ(environ, base_path)
        response = self.handle(request)

        start_response(response.status_line, response.wsgi_headers())
        if request.is_head:
            return [b""]
        return [response.body]

    def handle(self, request: RequestContext) -> Response:
        """Dispatch a request and return the response it produced."""
        response = Response()
        method = request.resolve_method(self.config)

        request_token = _current_request.set(request)
        response_token = _current_response.set(response)
        try:
            result = self.router.dispatch(method, request.uri, base_path=request.base_path)
        except Exception:
            logger.exception(f"Handler failed for {request.method} {request.uri}")
            return Response(status=500, body=b"500 Internal Server Error")
        finally:
            _current_response.reset(response_token)
            _current_request.reset(request_token)

        self._log(request, result)

        if result.not_found and not result.handled:
            response.status = 404
            if not response.body:
                response.body = b"404 Not Found"

        return response

    def _log(self, request: RequestContext, result: DispatchResult) -> None:
        if result.handled:
            logger.info(f"{request.method} {result.path} handled")
        elif result.not_found:
            logger.info(f"{request.method} {result.path} not found")
        else:
            logger.info(f"{request.method} {result.path} handled by {result.fallbacks_run} fallback(s)")


def serve(
    app: RouterApp,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Serve app with the wsgiref development server.

    Args:
        app: Application to serve
        host: Override configured host
        port: Override configured port
    """
    configure_logging(app.config)

    host = host or app.config.host
    port = port or app.config.port

    logger.info(f"Starting router on {host}:{port}")

    with make_server(host, port, app) as httpd:
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Stopping router")


__all__ = [
    "RouterApp",
    "serve",
]
