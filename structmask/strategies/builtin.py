"""The six default masking strategies.

Each strategy is a thin adapter around a pure string function so the
functions can also be used on their own, outside of record traversal.
All lengths are character counts.
"""

import logging
import re
from typing import Dict, Sequence

from ..core.directives import OPTION_SEPARATOR, parse_bounds
from .base import MaskStrategy

logger = logging.getLogger(__name__)


def mask_all(value: str, mask_char: str) -> str:
    """Mask every character in the string."""
    return mask_char * len(value)


def mask_regex(value: str, pattern: str, mask_char: str) -> str:
    """
    Mask every match of ``pattern``, keeping the length of each match.

    An invalid pattern leaves the string unchanged.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        logger.debug(f"Invalid masking pattern {pattern!r}: {e}")
        return value
    return compiled.sub(lambda match: mask_char * len(match.group(0)), value)


def mask_first(value: str, n: int, mask_char: str) -> str:
    """Mask the first ``n`` characters in the string."""
    if len(value) <= n:
        return mask_all(value, mask_char)
    return mask_char * n + value[n:]


def mask_last(value: str, n: int, mask_char: str) -> str:
    """Mask the last ``n`` characters in the string."""
    if len(value) <= n:
        return mask_all(value, mask_char)
    return value[: len(value) - n] + mask_char * n


def mask_corners(value: str, n: int, m: int, mask_char: str) -> str:
    """Mask the first ``n`` and the last ``m`` characters in the string."""
    if len(value) <= n + m:
        return mask_all(value, mask_char)
    return mask_char * n + value[n : len(value) - m] + mask_char * m


def mask_between(value: str, n: int, m: int, mask_char: str) -> str:
    """
    Mask everything except the first ``n`` and the last ``m`` characters.

    Unlike the other strategies, a string too short to hold both visible
    ends is returned unchanged rather than fully masked.
    """
    if len(value) <= n + m:
        return value
    return value[:n] + mask_char * (len(value) - n - m) + value[len(value) - m :]


class MaskAll(MaskStrategy):
    """``all``: replace every character."""

    name = "all"

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        return mask_all(value, mask_char)


class MaskRegex(MaskStrategy):
    """``regex,<pattern>``: mask each match of the pattern."""

    name = "regex"

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        if not options:
            return value
        # Patterns may contain commas of their own
        return mask_regex(value, OPTION_SEPARATOR.join(options), mask_char)


class MaskFirst(MaskStrategy):
    """``first[,n]``: mask the first n characters (default 1)."""

    name = "first"

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        (n,) = parse_bounds(options, (1,))
        return mask_first(value, n, mask_char)


class MaskLast(MaskStrategy):
    """``last[,n]``: mask the last n characters (default 1)."""

    name = "last"

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        (n,) = parse_bounds(options, (1,))
        return mask_last(value, n, mask_char)


class MaskCorners(MaskStrategy):
    """``corners[,n-m]``: mask n leading and m trailing characters (default 1-1)."""

    name = "corners"

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        n, m = parse_bounds(options, (1, 1))
        return mask_corners(value, n, m, mask_char)


class MaskBetween(MaskStrategy):
    """``between[,n-m]``: keep n leading and m trailing characters (default 1-1)."""

    name = "between"

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        n, m = parse_bounds(options, (1, 1))
        return mask_between(value, n, m, mask_char)


def builtin_strategies() -> Dict[str, MaskStrategy]:
    """Fresh instances of the default strategies keyed by method name."""
    strategies = (
        MaskAll(),
        MaskRegex(),
        MaskFirst(),
        MaskLast(),
        MaskCorners(),
        MaskBetween(),
    )
    return {strategy.name: strategy for strategy in strategies}
