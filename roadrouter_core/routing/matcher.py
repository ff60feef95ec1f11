"""Route Matcher - Pattern compilation and matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# "/{name}" with no nested braces or slashes inside the name
PLACEHOLDER = re.compile(r"/\{[^/{}]+\}")

GREEDY_CAPTURE = "/(.+)"
LAZY_CAPTURE = "/(.+?)"


class PatternError(ValueError):
    """Route pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


@dataclass(frozen=True)
class CompiledPattern:
    """A route pattern compiled to an anchored regex."""

    pattern: str
    regex: re.Pattern

    @property
    def group_count(self) -> int:
        return self.regex.groups


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one compiled pattern against a path."""

    matched: bool
    params: Tuple[Optional[str], ...] = ()

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(matched=False)


class PatternCompiler:
    """Compiles route patterns into anchored regexes.

    Placeholders are positional: ``/users/{id}`` and ``/users/{name}``
    compile to the same rule. Everything else in a pattern is regular
    expression syntax, so ``/movies/(\\d+)`` or ``/blog(/\\d+)?`` work too.

    A placeholder followed by another placeholder is greedy, the last one
    is lazy::

        /files/{dir}/{name}  ->  ^/files/(.+)/(.+?)$
    """

    def __init__(self):
        self._cache: Dict[str, CompiledPattern] = {}
        self._lock = threading.Lock()

    def compile(self, pattern: str) -> CompiledPattern:
        """Compile pattern (cached)."""
        compiled = self._cache.get(pattern)
        if compiled is not None:
            return compiled

        compiled = CompiledPattern(pattern=pattern, regex=self._build(pattern))
        with self._lock:
            self._cache.setdefault(pattern, compiled)
        return self._cache[pattern]

    def _build(self, pattern: str) -> re.Pattern:
        placeholders = list(PLACEHOLDER.finditer(pattern))
        parts = []
        last = 0
        for index, placeholder in enumerate(placeholders):
            parts.append(pattern[last:placeholder.start()])
            if index < len(placeholders) - 1:
                parts.append(GREEDY_CAPTURE)
            else:
                parts.append(LAZY_CAPTURE)
            last = placeholder.end()
        parts.append(pattern[last:])

        try:
            return re.compile("^" + "".join(parts) + "$")
        except re.error as e:
            raise PatternError(pattern, str(e)) from e

    def clear(self) -> None:
        """Drop all cached patterns."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


class PatternMatcher:
    """Matches compiled patterns against request paths.

    Parameter values are cut out of the path using group offsets rather
    than each group's own text: a group that is followed by a participating
    group ends where the next one starts. Values are ``/``-trimmed, and a
    group that took no part in the match yields ``None``.
    """

    def __init__(self, compiler: Optional[PatternCompiler] = None):
        self.compiler = compiler or PatternCompiler()

    def match(self, rule: CompiledPattern, path: str) -> MatchResult:
        """Match path against a compiled rule."""
        found = rule.regex.match(path)
        if found is None:
            return NO_MATCH
        return MatchResult(matched=True, params=self._extract(found, path))

    def match_pattern(self, pattern: str, path: str) -> MatchResult:
        """Compile (cached) and match in one step."""
        return self.match(self.compiler.compile(pattern), path)

    def matches(self, pattern: str, path: str) -> bool:
        """Check if path matches pattern."""
        return self.match_pattern(pattern, path).matched

    @staticmethod
    def _extract(found: re.Match, path: str) -> Tuple[Optional[str], ...]:
        count = found.re.groups
        params = []

        for group in range(1, count + 1):
            start, end = found.span(group)
            if start == -1:
                params.append(None)
                continue

            if group < count:
                next_start = found.start(group + 1)
                if next_start > -1:
                    stop = max(start, min(end, next_start))
                    params.append(path[start:stop].strip("/"))
                    continue

            params.append(path[start:end].strip("/"))

        return tuple(params)


default_compiler = PatternCompiler()


__all__ = [
    "CompiledPattern",
    "MatchResult",
    "NO_MATCH",
    "PatternCompiler",
    "PatternError",
    "PatternMatcher",
    "default_compiler",
]
