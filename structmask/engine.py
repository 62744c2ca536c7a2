"""Traversal engine that produces masked copies of records."""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, TypeVar, Union

from .config import MaskingConfig, get_config
from .core.exceptions import RecordTypeError, StrategyNotFoundError
from .core.directives import MaskDirective
from .core.locks import ReadWriteLock
from .core.records import (
    FieldDescriptor,
    RecordKind,
    copy_record,
    describe_record,
    record_kind,
)
from .core.schema import RecordSchema, load_schemas
from .observability.logging import get_logger, trace_operation
from .registry import StrategyRegistry

logger = get_logger(__name__)

R = TypeVar("R")


class StructMasker:
    """
    Masks annotated string fields of records, recursing into nested records.

    The engine never modifies its input. ``mask_record`` returns a new record
    of the same type in which every field carrying a masking directive and
    holding a string has been replaced by the output of the named strategy.
    Nested records are copied recursively; ``None`` stays ``None``; every
    other value is carried over as-is.

    Masking fails open: an unknown method, or a strategy that raises, leaves
    the field unchanged.

    Examples:
        >>> @dataclass
        ... class Customer:
        ...     name: str
        ...     phone: str = masked("last,4", mask_char="#")
        >>> masker = StructMasker()
        >>> masker.mask_record(Customer("Ada", "5551234567"))
        Customer(name='Ada', phone='555123####')
    """

    def __init__(
        self,
        registry: Optional[StrategyRegistry] = None,
        config: Optional[MaskingConfig] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            registry: Strategy registry to dispatch to; a fresh registry seeded
                with the built-in strategies is created when omitted
            config: Masking configuration; the process default when omitted
        """
        self.registry = registry if registry is not None else StrategyRegistry()
        self.config = config if config is not None else get_config()
        self._schema_lock = ReadWriteLock()
        self._schema_descriptors: Dict[type, Tuple[FieldDescriptor, ...]] = {}

    def register(self, name: str, strategy: Any) -> None:
        """Register a custom strategy with this engine's registry."""
        self.registry.register(name, strategy)

    def register_schema(
        self, record_type: type, schema: Union[RecordSchema, Dict[str, Any]]
    ) -> None:
        """
        Attach explicit masking rules to ``record_type``.

        Rules override the type's own annotations field by field.

        Raises:
            RecordTypeError: If ``record_type`` is not a record type
            SchemaError: If a rule names an unknown field
        """
        if not isinstance(schema, RecordSchema):
            schema = RecordSchema(rules=schema)
        descriptors = schema.apply(record_type)
        with self._schema_lock.write_lock():
            self._schema_descriptors[record_type] = descriptors
        logger.debug(
            "Registered record schema",
            record_type=record_type.__name__,
            rules=len(schema.rules),
        )

    def load_schemas(self, schema_path: Union[str, Path]) -> None:
        """Register every schema defined in a YAML schema file."""
        for record_type, schema in load_schemas(schema_path).items():
            self.register_schema(record_type, schema)

    def describe(self, record_type: type) -> Tuple[FieldDescriptor, ...]:
        """Field descriptors used for ``record_type``, schema rules included."""
        with self._schema_lock.read_lock():
            descriptors = self._schema_descriptors.get(record_type)
        if descriptors is not None:
            return descriptors
        return describe_record(record_type)

    def mask_record(self, record: R) -> R:
        """
        Return a masked copy of ``record``.

        Args:
            record: A dataclass instance, pydantic model or named tuple

        Returns:
            A new record of the same type with annotated string fields masked

        Raises:
            RecordTypeError: If ``record`` is not a record instance
        """
        kind = record_kind(record)
        if kind is None:
            raise RecordTypeError(record)

        with trace_operation(
            "mask_record",
            enabled=self.config.logging.enable_tracing,
            record_type=type(record).__name__,
        ):
            return self._mask_record(record, kind)  # type: ignore[no-any-return]

    def _mask_record(self, record: Any, kind: RecordKind) -> Any:
        values: Dict[str, Any] = {}
        for descriptor in self.describe(type(record)):
            value = getattr(record, descriptor.name)
            values[descriptor.name] = self._mask_value(record, descriptor, value)
        return copy_record(record, kind, values)

    def _mask_value(self, record: Any, descriptor: FieldDescriptor, value: Any) -> Any:
        if descriptor.directive is not None and _is_maskable_string(value):
            return self._apply_directive(record, descriptor, descriptor.directive, value)

        nested_kind = record_kind(value)
        if nested_kind is not None:
            return self._mask_record(value, nested_kind)

        return value

    def _apply_directive(
        self,
        record: Any,
        descriptor: FieldDescriptor,
        directive: MaskDirective,
        value: str,
    ) -> str:
        try:
            strategy = self.registry.lookup(directive.method)
        except StrategyNotFoundError:
            logger.debug(
                "Unknown masking method, leaving field unchanged",
                method=directive.method,
                record_type=type(record).__name__,
                field=descriptor.name,
            )
            return value

        mask_char = descriptor.mask_char or self.config.default_mask_char
        try:
            masked_value = strategy.mask(value, mask_char, directive.options)
        except Exception as e:
            logger.error(
                "Masking strategy failed, leaving field unchanged",
                method=directive.method,
                record_type=type(record).__name__,
                field=descriptor.name,
                error_type=type(e).__name__,
            )
            return value

        if not isinstance(masked_value, str):
            logger.warning(
                "Masking strategy returned a non-string, leaving field unchanged",
                method=directive.method,
                record_type=type(record).__name__,
                field=descriptor.name,
                result_type=type(masked_value).__name__,
            )
            return value

        return _restore_string_type(value, masked_value)


def _restore_string_type(value: str, masked_value: str) -> str:
    """Rebuild ``masked_value`` as the ``str`` subclass of ``value``."""
    value_type = type(value)
    if value_type is str or type(masked_value) is value_type:
        return masked_value
    try:
        return value_type(masked_value)
    except Exception as e:
        # Subclasses with their own constructor contract still get masked
        logger.debug(
            "Cannot rebuild string subclass, returning plain str",
            value_type=value_type.__name__,
            error_type=type(e).__name__,
        )
        return masked_value


def _is_maskable_string(value: Any) -> bool:
    # Enum members that subclass str are symbols, not data
    return isinstance(value, str) and not isinstance(value, Enum)

