"""Dispatcher - Runs before middleware, routes and the 404 protocol.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

from roadrouter_core.handlers.base import HandlerResolver, HandlerUnresolvable
from roadrouter_core.routing.matcher import PatternMatcher
from roadrouter_core.routing.notfound import NotFoundHandler
from roadrouter_core.routing.table import Phase, RouteEntry, RouteTable

logger = logging.getLogger(__name__)


class DispatchState(Enum):
    """Request cycle states."""

    START = auto()
    RUN_BEFORE = auto()
    RUN_ROUTES = auto()
    ROUTE_MATCHED = auto()
    NO_ROUTE_MATCHED = auto()
    DONE = auto()


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one dispatch."""

    method: str
    path: str
    handled: bool
    not_found: bool = False
    fallbacks_run: int = 0
    state: DispatchState = DispatchState.NO_ROUTE_MATCHED

    def __bool__(self) -> bool:
        return self.handled


class _Cycle:
    """Per-request state."""

    __slots__ = ("method", "path", "state", "not_found_ran", "not_found", "fallbacks_run")

    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        self.state = DispatchState.START
        self.not_found_ran = False
        self.not_found = False
        self.fallbacks_run = 0


class Dispatcher:
    """Request cycle over a route table.

    Pipeline:
    ┌────────────────────────────────────────────────────────────┐
    │  RunBefore:  every matching before entry runs              │
    │  RunRoutes:  first matching route runs, then stop          │
    │  matched  ──▶ completion callback                          │
    │  no match ──▶ 404 protocol (at most once per request)      │
    └────────────────────────────────────────────────────────────┘

    A handler that cannot be resolved counts as "no route matched" and
    triggers the 404 protocol. Exceptions raised by handlers propagate.
    """

    def __init__(
        self,
        table: RouteTable,
        not_found: NotFoundHandler,
        resolver: HandlerResolver,
        matcher: Optional[PatternMatcher] = None,
    ):
        self.table = table
        self.not_found = not_found
        self.resolver = resolver
        self.matcher = matcher or PatternMatcher(table.compiler)

    def dispatch(
        self,
        method: str,
        path: str,
        callback: Optional[Callable[[], Any]] = None,
    ) -> DispatchResult:
        """Dispatch an already resolved method and normalized path."""
        cycle = _Cycle(method.upper(), path)

        cycle.state = DispatchState.RUN_BEFORE
        for entry in self.table.entries(Phase.BEFORE, cycle.method):
            self._run_before(cycle, entry)

        cycle.state = DispatchState.RUN_ROUTES
        handled = False
        for entry in self.table.entries(Phase.AFTER, cycle.method):
            match = self.matcher.match(entry.rule, cycle.path)
            if not match:
                continue

            logger.debug(f"{cycle.method} {cycle.path} matched {entry.pattern}")
            try:
                handler = self.resolver.resolve(entry.handler)
            except HandlerUnresolvable as e:
                logger.warning(f"Route {entry.pattern} unresolvable: {e}")
                break

            handler(*match.params)
            handled = True
            break

        if handled:
            cycle.state = DispatchState.ROUTE_MATCHED
            if callback is not None:
                callback()
        else:
            cycle.state = DispatchState.NO_ROUTE_MATCHED
            self._trigger_not_found(cycle)

        result = DispatchResult(
            method=cycle.method,
            path=cycle.path,
            handled=handled,
            not_found=cycle.not_found,
            fallbacks_run=cycle.fallbacks_run,
            state=cycle.state,
        )
        cycle.state = DispatchState.DONE
        return result

    def _run_before(self, cycle: _Cycle, entry: RouteEntry) -> None:
        match = self.matcher.match(entry.rule, cycle.path)
        if not match:
            return

        logger.debug(f"{cycle.method} {cycle.path} before {entry.pattern}")
        try:
            handler = self.resolver.resolve(entry.handler)
        except HandlerUnresolvable as e:
            logger.warning(f"Before middleware {entry.pattern} unresolvable: {e}")
            self._trigger_not_found(cycle)
            return

        handler(*match.params)

    def _trigger_not_found(self, cycle: _Cycle) -> None:
        if cycle.not_found_ran:
            return
        cycle.not_found_ran = True

        logger.info(f"{cycle.method} {cycle.path} triggers 404 protocol")
        outcome = self.not_found.trigger(cycle.path, self.resolver.resolve)
        cycle.not_found = outcome.not_found
        cycle.fallbacks_run = outcome.invoked


__all__ = [
    "DispatchResult",
    "DispatchState",
    "Dispatcher",
]
