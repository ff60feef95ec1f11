"""Routing module - Pattern matching, route tables and dispatch."""

from roadrouter_core.routing.dispatcher import DispatchResult, DispatchState, Dispatcher
from roadrouter_core.routing.matcher import (
    CompiledPattern,
    MatchResult,
    PatternCompiler,
    PatternError,
    PatternMatcher,
)
from roadrouter_core.routing.notfound import FallbackEntry, FallbackOutcome, NotFoundHandler
from roadrouter_core.routing.router import Router
from roadrouter_core.routing.table import Mounter, Phase, RouteEntry, RouteTable

__all__ = [
    "CompiledPattern",
    "DispatchResult",
    "DispatchState",
    "Dispatcher",
    "FallbackEntry",
    "FallbackOutcome",
    "MatchResult",
    "Mounter",
    "NotFoundHandler",
    "PatternCompiler",
    "PatternError",
    "PatternMatcher",
    "Phase",
    "RouteEntry",
    "RouteTable",
    "Router",
]
