"""Record introspection: field descriptors and copy construction.

A record is an instance of a type with a fixed, ordered set of named fields.
Three kinds are understood: dataclasses, pydantic models and named tuples.
Masking directives live in the field metadata of dataclasses and in
``json_schema_extra`` of pydantic fields, under the keys :data:`MASK_KEY` and
:data:`MASK_TAG_KEY`::

    @dataclass
    class Customer:
        name: str
        phone: str = masked("last,4", mask_char="#")

    class Account(BaseModel):
        iban: str = Field(json_schema_extra=mask_metadata("between,4-4"))

Named tuples cannot carry metadata; give them a schema instead
(see :mod:`structmask.core.schema`).
"""

import copy
import dataclasses
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from .directives import MaskDirective, parse_directive
from .exceptions import RecordTypeError

MASK_KEY = "mask"
MASK_TAG_KEY = "mask_tag"


class RecordKind(Enum):
    """Kinds of record the engine knows how to walk and copy."""

    DATACLASS = "dataclass"
    PYDANTIC = "pydantic"
    NAMEDTUPLE = "namedtuple"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Masking configuration for one field of a record type.

    Attributes:
        name: Attribute name of the field
        directive: Parsed masking directive, None when the field is not masked
        mask_char: Mask character override, None to use the configured default
    """

    name: str
    directive: Optional[MaskDirective] = None
    mask_char: Optional[str] = None

    @property
    def is_masked(self) -> bool:
        return self.directive is not None


def mask_metadata(directive: str, mask_char: Optional[str] = None) -> Dict[str, str]:
    """Build the metadata mapping that marks a field for masking."""
    metadata = {MASK_KEY: directive}
    if mask_char:
        metadata[MASK_TAG_KEY] = mask_char
    return metadata


def masked(directive: str, mask_char: Optional[str] = None, **kwargs: Any) -> Any:
    """
    Declare a dataclass field that is masked with ``directive``.

    Accepts the same keyword arguments as :func:`dataclasses.field`; any
    ``metadata`` passed in is kept alongside the masking keys.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata.update(mask_metadata(directive, mask_char))
    return dataclasses.field(metadata=metadata, **kwargs)


def record_kind(value: Any) -> Optional[RecordKind]:
    """Return the kind of record ``value`` is, or None for non-records."""
    if isinstance(value, type):
        return None
    if dataclasses.is_dataclass(value):
        return RecordKind.DATACLASS
    if isinstance(value, BaseModel):
        return RecordKind.PYDANTIC
    if isinstance(value, tuple) and hasattr(type(value), "_fields"):
        return RecordKind.NAMEDTUPLE
    return None


def is_record(value: Any) -> bool:
    """True if ``value`` is a record instance the engine can mask."""
    return record_kind(value) is not None


def _descriptor_from_metadata(name: str, metadata: Optional[Mapping[str, Any]]) -> FieldDescriptor:
    if not metadata:
        return FieldDescriptor(name=name)
    directive = metadata.get(MASK_KEY)
    mask_char = metadata.get(MASK_TAG_KEY)
    return FieldDescriptor(
        name=name,
        directive=parse_directive(directive) if isinstance(directive, str) else None,
        mask_char=mask_char if isinstance(mask_char, str) and mask_char else None,
    )


@lru_cache(maxsize=None)
def describe_record(record_type: type) -> Tuple[FieldDescriptor, ...]:
    """
    Build the ordered field descriptors of a record type.

    The result is cached per type; record types are fixed at definition.

    Raises:
        RecordTypeError: If ``record_type`` is not a record type
    """
    if not isinstance(record_type, type):
        raise RecordTypeError(
            record_type, message=f"Expected a record type, got {record_type!r}"
        )

    if dataclasses.is_dataclass(record_type):
        return tuple(
            _descriptor_from_metadata(f.name, f.metadata)
            for f in dataclasses.fields(record_type)
        )

    if issubclass(record_type, BaseModel):
        descriptors = []
        for name, info in record_type.model_fields.items():
            extra = info.json_schema_extra
            descriptors.append(
                _descriptor_from_metadata(name, extra if isinstance(extra, dict) else None)
            )
        return tuple(descriptors)

    if issubclass(record_type, tuple) and hasattr(record_type, "_fields"):
        return tuple(FieldDescriptor(name=name) for name in record_type._fields)

    raise RecordTypeError(
        record_type,
        message=(
            f"{record_type.__name__} is not a dataclass, pydantic model or NamedTuple"
        ),
    )


def copy_record(record: Any, kind: RecordKind, values: Dict[str, Any]) -> Any:
    """
    Build a new record of the same type as ``record`` with ``values`` applied.

    The copy is made without calling ``__init__`` or running validation, so
    frozen dataclasses and validated models are copied exactly as they are.
    """
    if kind is RecordKind.DATACLASS:
        new_record = copy.copy(record)
        for name, value in values.items():
            object.__setattr__(new_record, name, value)
        return new_record

    if kind is RecordKind.PYDANTIC:
        changed = {
            name: value
            for name, value in values.items()
            if value is not getattr(record, name)
        }
        new_record = record.model_copy(update=changed)
        # model_copy marks every updated field as set; keep the original's
        # set so exclude_unset dumps have the same keys
        object.__setattr__(
            new_record, "__pydantic_fields_set__", set(record.model_fields_set)
        )
        return new_record

    return record._replace(**values)
