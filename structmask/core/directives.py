"""Parsing of masking directives.

A directive is the annotation attached to a record field, for example
``"last,4"`` or ``"corners,5-4"``. The text before the first comma names the
masking method; everything after it is handed to the strategy as raw option
tokens.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

OPTION_SEPARATOR = ","
BOUNDS_SEPARATOR = "-"

# ASCII digits only, with an optional leading plus sign
_COUNT_PATTERN = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class MaskDirective:
    """
    Parsed form of a field's masking annotation.

    Attributes:
        method: Name of the strategy to dispatch to
        options: Raw option tokens that followed the method name

    Examples:
        >>> parse_directive("corners,5-4")
        MaskDirective(method='corners', options=('5-4',))

        >>> parse_directive("all")
        MaskDirective(method='all', options=())
    """

    method: str
    options: Tuple[str, ...] = ()

    @property
    def option_string(self) -> str:
        """Options re-joined exactly as they appeared after the method name."""
        return OPTION_SEPARATOR.join(self.options)

    def __str__(self) -> str:
        if not self.options:
            return self.method
        return f"{self.method}{OPTION_SEPARATOR}{self.option_string}"


def parse_directive(text: Optional[str]) -> Optional[MaskDirective]:
    """
    Parse a directive string into a :class:`MaskDirective`.

    Args:
        text: Directive text in the form ``method`` or ``method,options``

    Returns:
        The parsed directive, or None when ``text`` is empty or missing
    """
    if not text:
        return None

    method, separator, rest = text.partition(OPTION_SEPARATOR)
    if not separator:
        return MaskDirective(method=method)
    return MaskDirective(method=method, options=tuple(rest.split(OPTION_SEPARATOR)))


def parse_count(token: str) -> Optional[int]:
    """Parse a non-negative decimal count, returning None when malformed."""
    if not _COUNT_PATTERN.fullmatch(token):
        return None
    return int(token)


def parse_bounds(options: Sequence[str], defaults: Tuple[int, ...]) -> Tuple[int, ...]:
    """
    Read numeric bounds from the first option token.

    A single bound is read as a plain count (``"3"``); two bounds are read as
    ``"n-m"``. Any malformed token, or the wrong number of parts, yields
    ``defaults`` unchanged.

    Args:
        options: Raw option tokens from a directive
        defaults: Default bounds; its length is the number of bounds expected

    Returns:
        Tuple of parsed bounds with the same length as ``defaults``
    """
    if not options:
        return defaults

    token = options[0]
    parts = token.split(BOUNDS_SEPARATOR) if len(defaults) > 1 else [token]
    if len(parts) != len(defaults):
        return defaults

    bounds = []
    for part in parts:
        count = parse_count(part)
        if count is None:
            return defaults
        bounds.append(count)
    return tuple(bounds)
