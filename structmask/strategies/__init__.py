"""Masking strategies: the strategy interface and the built-in algorithms."""

from .base import FunctionStrategy, MaskFunction, MaskStrategy
from .builtin import (
    MaskAll,
    MaskBetween,
    MaskCorners,
    MaskFirst,
    MaskLast,
    MaskRegex,
    builtin_strategies,
    mask_all,
    mask_between,
    mask_corners,
    mask_first,
    mask_last,
    mask_regex,
)

__all__ = [
    "MaskStrategy",
    "FunctionStrategy",
    "MaskFunction",
    "MaskAll",
    "MaskRegex",
    "MaskFirst",
    "MaskLast",
    "MaskCorners",
    "MaskBetween",
    "builtin_strategies",
    "mask_all",
    "mask_regex",
    "mask_first",
    "mask_last",
    "mask_corners",
    "mask_between",
]
