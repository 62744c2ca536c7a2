"""Explicit masking schemas for record types that cannot carry annotations.

Third-party dataclasses and named tuples have no room for masking metadata.
A schema supplies the directives from outside, either in code::

    masker.register_schema(Point, RecordSchema(rules={"label": "all"}))

or from a YAML file keyed by import path::

    myapp.models:Customer:
      email: "regex,^[^@]+"
      card:
        mask: "corners,4-4"
        mask_tag: "#"
"""

import dataclasses
import importlib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .directives import parse_directive
from .exceptions import SchemaError
from .records import FieldDescriptor, describe_record


class FieldRule(BaseModel):
    """Masking rule for one field."""

    model_config = ConfigDict(extra="forbid")

    mask: Optional[str] = Field(None, description="Masking directive")
    mask_tag: Optional[str] = Field(None, description="Mask character override")


class RecordSchema(BaseModel):
    """Masking rules for the fields of one record type."""

    model_config = ConfigDict(extra="forbid")

    rules: Dict[str, FieldRule] = Field(default_factory=dict)

    @field_validator("rules", mode="before")
    @classmethod
    def expand_short_rules(cls, v: Any) -> Any:
        """Accept ``field: "directive"`` as shorthand for ``field: {mask: ...}``."""
        if not isinstance(v, dict):
            return v
        return {
            name: {"mask": rule} if isinstance(rule, str) else rule
            for name, rule in v.items()
        }

    def apply(self, record_type: type) -> Tuple[FieldDescriptor, ...]:
        """
        Overlay these rules on the annotated descriptors of ``record_type``.

        Raises:
            SchemaError: If a rule names a field the type does not have
        """
        descriptors = describe_record(record_type)
        known = {descriptor.name for descriptor in descriptors}
        unknown = sorted(set(self.rules) - known)
        if unknown:
            raise SchemaError(
                f"{record_type.__name__} has no field(s) {', '.join(unknown)}",
                record_type=record_type.__name__,
                field_name=unknown[0],
            )

        overlaid = []
        for descriptor in descriptors:
            rule = self.rules.get(descriptor.name)
            if rule is None:
                overlaid.append(descriptor)
                continue
            overlaid.append(
                dataclasses.replace(
                    descriptor,
                    directive=parse_directive(rule.mask),
                    mask_char=rule.mask_tag or None,
                )
            )
        return tuple(overlaid)


def resolve_type(path: str) -> type:
    """
    Import a type from ``"package.module:QualifiedName"``.

    Raises:
        SchemaError: If the path is malformed or does not name a class
    """
    module_name, separator, qualname = path.partition(":")
    if not separator or not module_name or not qualname:
        raise SchemaError(
            f"Invalid type path '{path}', expected 'package.module:ClassName'"
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise SchemaError(f"Cannot import module '{module_name}': {e}") from e

    for attribute in qualname.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as e:
            raise SchemaError(
                f"Module '{module_name}' has no attribute '{qualname}'"
            ) from e

    if not isinstance(target, type):
        raise SchemaError(f"'{path}' does not name a class")
    return target


def load_schemas(schema_path: Union[str, Path]) -> Dict[type, RecordSchema]:
    """
    Load record schemas from a YAML file.

    Args:
        schema_path: File mapping type import paths to field rules

    Returns:
        Dictionary of record type to schema

    Raises:
        FileNotFoundError: If the file does not exist
        SchemaError: If the file is malformed or names unknown types
    """
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SchemaError(
            f"Invalid YAML in schema file: {e}", schema_file=str(schema_path)
        ) from e

    if not isinstance(data, dict):
        raise SchemaError(
            "Schema file must map type paths to field rules",
            schema_file=str(schema_path),
        )

    schemas: Dict[type, RecordSchema] = {}
    for type_path, rules in data.items():
        record_type = resolve_type(str(type_path))
        try:
            schemas[record_type] = RecordSchema(rules=rules or {})
        except ValidationError as e:
            raise SchemaError(
                f"Invalid rules for {type_path}: {e}",
                record_type=record_type.__name__,
                schema_file=str(schema_path),
            ) from e
    return schemas
