"""Not Found - Fallback handlers for unmatched requests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from roadrouter_core.handlers.base import HandlerRef, HandlerUnresolvable, as_handler_ref
from roadrouter_core.routing.matcher import (
    CompiledPattern,
    PatternCompiler,
    PatternMatcher,
    default_compiler,
)

logger = logging.getLogger(__name__)

DEFAULT_KEY = "/"

Resolve = Callable[[HandlerRef], Callable[..., Any]]


@dataclass(frozen=True)
class FallbackEntry:
    """Fallback definition."""

    pattern: str
    handler: HandlerRef
    rule: CompiledPattern


@dataclass(frozen=True)
class FallbackOutcome:
    """What the 404 protocol did."""

    invoked: int = 0
    not_found: bool = False


class NotFoundHandler:
    """Pattern-keyed 404 handlers.

    On trigger every keyed fallback whose pattern matches runs, in
    registration order. Only when none matched does the default (keyed
    ``"/"``) run. When neither fired the outcome is a bare not found.

    Usage:
        not_found = NotFoundHandler()
        not_found.set(render_404)
        not_found.set("/api(/.*)?", render_api_404)
    """

    def __init__(self, compiler: Optional[PatternCompiler] = None):
        self.compiler = compiler or default_compiler
        self.matcher = PatternMatcher(self.compiler)
        self._fallbacks: Dict[str, FallbackEntry] = {}
        self._lock = threading.RLock()

    def set(self, pattern_or_handler: Any, handler: Any = None) -> FallbackEntry:
        """Register the default fallback, or a fallback for a pattern."""
        if handler is None:
            pattern, handler = DEFAULT_KEY, pattern_or_handler
        else:
            pattern = pattern_or_handler

        entry = FallbackEntry(
            pattern=pattern,
            handler=as_handler_ref(handler),
            rule=self.compiler.compile(pattern),
        )
        with self._lock:
            self._fallbacks[pattern] = entry
        return entry

    @property
    def default(self) -> Optional[FallbackEntry]:
        return self._fallbacks.get(DEFAULT_KEY)

    def entries(self) -> List[FallbackEntry]:
        """Keyed fallbacks, default excluded."""
        with self._lock:
            return [
                entry for key, entry in self._fallbacks.items() if key != DEFAULT_KEY
            ]

    def trigger(self, path: str, resolve: Resolve) -> FallbackOutcome:
        """Run the fallback protocol for path."""
        invoked = 0

        for entry in self.entries():
            if not self.matcher.match(entry.rule, path):
                continue
            if self._run(entry, resolve):
                invoked += 1

        if invoked == 0:
            default = self.default
            if default is not None and self._run(default, resolve):
                invoked += 1

        if invoked == 0:
            logger.info(f"No fallback for {path}, not found")
            return FallbackOutcome(invoked=0, not_found=True)

        return FallbackOutcome(invoked=invoked)

    def _run(self, entry: FallbackEntry, resolve: Resolve) -> bool:
        try:
            handler = resolve(entry.handler)
        except HandlerUnresolvable as e:
            logger.warning(f"Fallback {entry.pattern} skipped: {e}")
            return False

        # fallbacks are called without parameters
        handler()
        return True

    def __len__(self) -> int:
        return len(self._fallbacks)


__all__ = [
    "DEFAULT_KEY",
    "FallbackEntry",
    "FallbackOutcome",
    "NotFoundHandler",
]
