"""StructMask: masked copies of structured records.

Fields of dataclasses, pydantic models and named tuples are annotated with a
masking directive such as ``"last,4"``; :class:`StructMasker` walks a record,
dispatches each directive to a named strategy and returns a masked copy,
leaving the original untouched.
"""

__version__ = "0.1.0"

from .config import LoggingConfig, MaskingConfig, get_config, reset_config, set_config
from .core import (
    MASK_KEY,
    MASK_TAG_KEY,
    ConfigurationError,
    FieldDescriptor,
    FieldRule,
    MaskDirective,
    RecordSchema,
    RecordTypeError,
    SchemaError,
    StrategyNotFoundError,
    StrategyRegistrationError,
    StructMaskError,
    describe_record,
    is_record,
    load_schemas,
    mask_metadata,
    masked,
    parse_directive,
)
from .engine import StructMasker
from .observability import configure_logging
from .registry import StrategyRegistry
from .strategies import (
    FunctionStrategy,
    MaskAll,
    MaskBetween,
    MaskCorners,
    MaskFirst,
    MaskLast,
    MaskRegex,
    MaskStrategy,
    mask_all,
    mask_between,
    mask_corners,
    mask_first,
    mask_last,
    mask_regex,
)

__all__ = [
    "__version__",
    # Engine and registry
    "StructMasker",
    "StrategyRegistry",
    # Annotations
    "masked",
    "mask_metadata",
    "MASK_KEY",
    "MASK_TAG_KEY",
    "MaskDirective",
    "parse_directive",
    "FieldDescriptor",
    "describe_record",
    "is_record",
    # Schemas
    "FieldRule",
    "RecordSchema",
    "load_schemas",
    # Strategies
    "MaskStrategy",
    "FunctionStrategy",
    "MaskAll",
    "MaskRegex",
    "MaskFirst",
    "MaskLast",
    "MaskCorners",
    "MaskBetween",
    "mask_all",
    "mask_regex",
    "mask_first",
    "mask_last",
    "mask_corners",
    "mask_between",
    # Configuration
    "MaskingConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "reset_config",
    "configure_logging",
    # Errors
    "StructMaskError",
    "StrategyNotFoundError",
    "StrategyRegistrationError",
    "RecordTypeError",
    "SchemaError",
    "ConfigurationError",
]
