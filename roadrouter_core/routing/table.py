"""Route Table - Before middleware and route storage.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from roadrouter_core.handlers.base import HandlerRef, as_handler_ref
from roadrouter_core.routing.matcher import (
    CompiledPattern,
    PatternCompiler,
    default_compiler,
)
from roadrouter_core.utils.helpers import Methods, join_pattern, split_methods

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Which table an entry belongs to."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class RouteEntry:
    """Route definition."""

    pattern: str
    handler: HandlerRef
    rule: CompiledPattern


class Mounter:
    """Tracks the mount prefix during registration.

    Usage:
        mounter.mount("/api", lambda: ...)

        with mounter.scope("/v1"):
            ...
    """

    def __init__(self):
        self._prefix = ""

    @property
    def prefix(self) -> str:
        """Current prefix."""
        return self._prefix

    def effective_pattern(self, pattern: str) -> str:
        """Pattern with the current prefix applied."""
        return join_pattern(self._prefix, pattern)

    @contextmanager
    def scope(self, prefix: str) -> Iterator[str]:
        """Extend the prefix for the duration of the block."""
        saved = self._prefix
        self._prefix = saved + prefix
        try:
            yield self._prefix
        finally:
            self._prefix = saved

    def mount(self, prefix: str, body: Callable[[], Any]) -> None:
        """Call body with prefix appended to the current scope."""
        with self.scope(prefix):
            body()


class RouteTable:
    """Routes and before middleware, keyed by method.

    Registration order is evaluation order. Dispatch reads through
    ``entries()``, which returns a snapshot.
    """

    def __init__(self, compiler: Optional[PatternCompiler] = None):
        self.compiler = compiler or default_compiler
        self._tables: Dict[Phase, Dict[str, List[RouteEntry]]] = {
            Phase.BEFORE: {},
            Phase.AFTER: {},
        }
        self._lock = threading.RLock()

    def register(
        self,
        methods: Methods,
        pattern: str,
        handler: Any,
        phase: Phase = Phase.AFTER,
    ) -> RouteEntry:
        """Append an entry for every method.

        ``pattern`` is stored as given; callers apply mount prefixes first.
        """
        verbs = split_methods(methods)
        entry = RouteEntry(
            pattern=pattern,
            handler=as_handler_ref(handler),
            rule=self.compiler.compile(pattern),
        )

        with self._lock:
            table = self._tables[phase]
            for method in verbs:
                table.setdefault(method, []).append(entry)

        logger.debug(f"Registered {phase.value} {'|'.join(verbs)} {pattern} -> {entry.handler}")
        return entry

    def entries(self, phase: Phase, method: str) -> Tuple[RouteEntry, ...]:
        """Snapshot of the entries for one method."""
        with self._lock:
            return tuple(self._tables[phase].get(method, ()))

    def methods(self, phase: Phase) -> List[str]:
        """Methods with at least one entry."""
        with self._lock:
            return list(self._tables[phase])

    def __len__(self) -> int:
        with self._lock:
            return sum(
                len(entries)
                for table in self._tables.values()
                for entries in table.values()
            )


__all__ = [
    "Mounter",
    "Phase",
    "RouteEntry",
    "RouteTable",
]
