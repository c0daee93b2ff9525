"""Wildcard pattern matching and specificity ordering.

A pattern is a string in which a single wildcard token (``*`` by default)
matches any sequence of characters, including the empty one. Runs of
consecutive tokens are equivalent to one token. There is no escape for a
literal token.

``includes(a, b)`` means *a is more general than b*: ``a`` matches the
literal text of ``b`` but ``b`` does not match the literal text of ``a``.
When a precedence resolver has several matching rules, the one that no
other candidate is included by wins.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from enum import Enum

from rulematch.config import Config
from rulematch.errors import ConfigError, PatternCompileError

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SYNTAX",
    "Specificity",
    "WildcardSyntax",
    "clear_cache",
    "compare_specificity",
    "compile_pattern",
    "equals",
    "includes",
    "is_more_general",
    "is_more_specific",
    "literal_skeleton",
    "matches",
    "normalize",
]

_CACHE_MAX_SIZE = 1024
_cache: dict[tuple[str, str], re.Pattern[str]] = {}
_cache_lock = threading.Lock()


class Specificity(str, Enum):
    """Outcome of comparing two patterns."""

    EQUAL = "equal"
    A_INCLUDES_B = "a_includes_b"
    UNRELATED = "unrelated"


@dataclass(frozen=True)
class WildcardSyntax:
    """A wildcard convention: the token that stands for "any characters".

    Instances are immutable and safe to share between threads.
    """

    token: str = "*"

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigError("Wildcard token must be a non-empty string")

    @classmethod
    def from_config(cls, config: Config) -> WildcardSyntax:
        """Build the syntax from the ``wildcard.token`` config key."""
        token = config.get("wildcard.token", "*")
        if not isinstance(token, str):
            raise ConfigError(
                f"'wildcard.token' must be a string, got {type(token).__name__}"
            )
        return cls(token=token)

    @property
    def _run(self) -> re.Pattern[str]:
        return re.compile(f"(?:{re.escape(self.token)}){{2,}}")

    def normalize(self, pattern: str) -> str:
        """Collapse every run of consecutive wildcard tokens into one token."""
        if self.token * 2 not in pattern:
            return pattern
        return self._run.sub(lambda _: self.token, pattern)

    def literal_skeleton(self, pattern: str) -> str:
        """Return the pattern with every wildcard token removed."""
        return pattern.replace(self.token, "")

    def compile(self, normalized: str) -> re.Pattern[str]:
        """Compile a normalized pattern into an anchored regular expression.

        Literal segments are escaped; each token becomes a gap matching any
        characters, newlines included. Use ``fullmatch`` on the result.

        Raises:
            PatternCompileError: If the regex engine rejects the expression.
        """
        key = (self.token, normalized)
        with _cache_lock:
            cached = _cache.get(key)
        if cached is not None:
            return cached

        expression = ".*".join(re.escape(part) for part in normalized.split(self.token))
        try:
            compiled = re.compile(expression, re.DOTALL)
        except (re.error, OverflowError, RecursionError) as e:
            logger.error("Failed to compile pattern %r: %s", normalized, e)
            raise PatternCompileError(pattern=normalized, reason=str(e), cause=e) from e

        with _cache_lock:
            if len(_cache) >= _CACHE_MAX_SIZE:
                _cache.pop(next(iter(_cache)))
            _cache[key] = compiled
        return compiled

    def matches(self, pattern: str, value: str, strip_wildcards: bool = False) -> bool:
        """Check whether ``pattern`` matches the whole of ``value``.

        Args:
            pattern: Wildcard pattern; normalized before compiling.
            value: Literal value. Any wildcard tokens it contains are
                matched as ordinary characters.
            strip_wildcards: Remove wildcard tokens from ``value`` first.

        Returns:
            True if the pattern spans the entire value.
        """
        if strip_wildcards:
            value = self.literal_skeleton(value)
        return self.compile(self.normalize(pattern)).fullmatch(value) is not None

    def equals(self, a: str, b: str) -> bool:
        """Two patterns are equal when their normalized forms are identical."""
        return self.normalize(a) == self.normalize(b)

    def compare_specificity(self, a: str, b: str) -> Specificity:
        """Decide whether ``a`` is equal to, more general than, or unrelated to ``b``.

        When both patterns reduce to the same literal skeleton, the one with
        more wildcard tokens is the more general, provided it matches the
        other's literal text. Otherwise ``a`` includes ``b`` when ``a``
        matches ``b`` but not the reverse.
        """
        norm_a = self.normalize(a)
        norm_b = self.normalize(b)
        if norm_a == norm_b:
            return Specificity.EQUAL

        a_matches_b = self.matches(norm_a, norm_b)
        b_matches_a = self.matches(norm_b, norm_a)

        if self.literal_skeleton(norm_a) == self.literal_skeleton(norm_b):
            more_wildcards = norm_a.count(self.token) > norm_b.count(self.token)
            if more_wildcards and a_matches_b:
                return Specificity.A_INCLUDES_B
            return Specificity.UNRELATED

        if a_matches_b and not b_matches_a:
            return Specificity.A_INCLUDES_B
        return Specificity.UNRELATED

    def includes(self, a: str, b: str) -> bool:
        """Return True if ``a`` is strictly more general than ``b``."""
        return self.compare_specificity(a, b) is Specificity.A_INCLUDES_B

    is_more_general = includes

    def is_more_specific(self, a: str, b: str) -> bool:
        """Return True if ``a`` is strictly more specific than ``b``."""
        return self.includes(b, a)


DEFAULT_SYNTAX = WildcardSyntax()


def clear_cache() -> None:
    """Drop every memoized compiled pattern."""
    with _cache_lock:
        _cache.clear()


def normalize(pattern: str) -> str:
    return DEFAULT_SYNTAX.normalize(pattern)


def literal_skeleton(pattern: str) -> str:
    return DEFAULT_SYNTAX.literal_skeleton(pattern)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Normalize and compile ``pattern`` with the default ``*`` token."""
    return DEFAULT_SYNTAX.compile(DEFAULT_SYNTAX.normalize(pattern))


def matches(pattern: str, value: str, strip_wildcards: bool = False) -> bool:
    """Match a literal value against a ``*`` wildcard pattern.

    Supports '*' as a wildcard that matches any sequence of characters.
    The match is anchored at both ends.

    Args:
        pattern: The pattern to match against. May contain '*' wildcards.
        value: The literal value to test.
        strip_wildcards: Remove '*' characters from the value before testing.

    Returns:
        True if the value matches the pattern, False otherwise.
    """
    return DEFAULT_SYNTAX.matches(pattern, value, strip_wildcards)


def equals(a: str, b: str) -> bool:
    return DEFAULT_SYNTAX.equals(a, b)


def compare_specificity(a: str, b: str) -> Specificity:
    return DEFAULT_SYNTAX.compare_specificity(a, b)


def includes(a: str, b: str) -> bool:
    """Return True if pattern ``a`` is strictly more general than ``b``."""
    return DEFAULT_SYNTAX.includes(a, b)


def is_more_general(a: str, b: str) -> bool:
    return DEFAULT_SYNTAX.includes(a, b)


def is_more_specific(a: str, b: str) -> bool:
    return DEFAULT_SYNTAX.is_more_specific(a, b)
