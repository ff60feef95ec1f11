"""RoadRouter - Regex request router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RoadRouter maps a method and path onto handlers with:
- Regex route patterns with positional {placeholders}
- Before middleware that runs for every matching request
- First-match routes
- Nested mounting under shared prefixes
- Pattern-keyed 404 fallbacks
- Named handlers resolved by import ("Controller::method")

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                              RoadRouter                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                           Request Cycle                                │  │
│  │  Transport ──▶ Before (all) ──▶ Routes (first) ──▶ Callback | 404     │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │    Handlers     │  │        Gateway              │ │
│  │                 │  │                 │  │                             │ │
│  │ - Compiler      │  │ - Direct refs   │  │ - RequestContext            │ │
│  │ - Matcher       │  │ - Named refs    │  │ - Method override / HEAD    │ │
│  │ - Route table   │  │ - Import lookup │  │ - Response                  │ │
│  │ - Mounting      │  │ - Registry      │  │ - WSGI app                  │ │
│  │ - Dispatcher    │  │                 │  │                             │ │
│  │ - Not found     │  │                 │  │                             │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Request Flow:
1. Transport resolves the method (HEAD as GET, POST overrides)
2. URI is decoded, stripped of base path and query, normalized
3. Every matching before middleware runs
4. The first matching route runs with its parameters
5. Completion callback runs, or the 404 protocol when no route matched
6. Transport renders 404 when nothing handled the request

Usage:
    from roadrouter_core import Router

    router = Router()
    router.before("GET|POST", "/admin/.*", require_login)
    router.get("/users/{id}", show_user)
    router.mount("/api", lambda: router.get("/status", "StatusController::show"))
    router.set_not_found(render_404)

    router.run("GET", "/users/42")
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from roadrouter_core.routing.router import Router
from roadrouter_core.routing.dispatcher import Dispatcher, DispatchResult, DispatchState
from roadrouter_core.routing.matcher import (
    CompiledPattern,
    MatchResult,
    PatternCompiler,
    PatternError,
    PatternMatcher,
)
from roadrouter_core.routing.notfound import NotFoundHandler
from roadrouter_core.routing.table import Mounter, Phase, RouteEntry, RouteTable

# Handlers
from roadrouter_core.handlers.base import (
    DirectHandler,
    HandlerResolver,
    HandlerUnresolvable,
    NamedHandler,
)
from roadrouter_core.handlers.resolver import ImportResolver, RegistryResolver

# Gateway
from roadrouter_core.gateway.request import (
    RequestContext,
    Response,
    current_request,
    current_response,
)
from roadrouter_core.gateway.server import RouterApp, serve

# Utils
from roadrouter_core.utils.config import RouterConfig, configure_logging, load_config

__all__ = [
    # Version
    "__version__",
    # Routing
    "Router",
    "Dispatcher",
    "DispatchResult",
    "DispatchState",
    "CompiledPattern",
    "MatchResult",
    "PatternCompiler",
    "PatternError",
    "PatternMatcher",
    "NotFoundHandler",
    "Mounter",
    "Phase",
    "RouteEntry",
    "RouteTable",
    # Handlers
    "DirectHandler",
    "HandlerResolver",
    "HandlerUnresolvable",
    "NamedHandler",
    "ImportResolver",
    "RegistryResolver",
    # Gateway
    "RequestContext",
    "Response",
    "RouterApp",
    "current_request",
    "current_response",
    "serve",
    # Utils
    "RouterConfig",
    "configure_logging",
    "load_config",
]
