"""Core building blocks: directives, record introspection, schemas and errors."""

from .directives import MaskDirective, parse_bounds, parse_count, parse_directive
from .exceptions import (
    ConfigurationError,
    RecordTypeError,
    SchemaError,
    StrategyNotFoundError,
    StrategyRegistrationError,
    StructMaskError,
)
from .locks import ReadWriteLock
from .records import (
    MASK_KEY,
    MASK_TAG_KEY,
    FieldDescriptor,
    RecordKind,
    copy_record,
    describe_record,
    is_record,
    mask_metadata,
    masked,
    record_kind,
)
from .schema import FieldRule, RecordSchema, load_schemas, resolve_type

__all__ = [
    # Directives
    "MaskDirective",
    "parse_directive",
    "parse_bounds",
    "parse_count",
    # Records
    "MASK_KEY",
    "MASK_TAG_KEY",
    "FieldDescriptor",
    "RecordKind",
    "describe_record",
    "copy_record",
    "record_kind",
    "is_record",
    "masked",
    "mask_metadata",
    # Schemas
    "FieldRule",
    "RecordSchema",
    "load_schemas",
    "resolve_type",
    # Concurrency
    "ReadWriteLock",
    # Errors
    "StructMaskError",
    "StrategyNotFoundError",
    "StrategyRegistrationError",
    "RecordTypeError",
    "SchemaError",
    "ConfigurationError",
]
