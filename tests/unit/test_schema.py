"""Tests for explicit record schemas."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from structmask import StructMasker
from structmask.core.directives import MaskDirective
from structmask.core.exceptions import SchemaError
from structmask.core.schema import FieldRule, RecordSchema, load_schemas, resolve_type
from tests.utils.records import ChildRecord, Coordinates


class TestRecordSchema:
    def test_short_form_rules(self) -> None:
        schema = RecordSchema(rules={"label": "all"})

        assert schema.rules == {"label": FieldRule(mask="all")}

    def test_long_form_rules(self) -> None:
        schema = RecordSchema(rules={"label": {"mask": "first,2", "mask_tag": "#"}})

        assert schema.rules["label"] == FieldRule(mask="first,2", mask_tag="#")

    def test_unknown_rule_key_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RecordSchema(rules={"label": {"mask": "all", "colour": "red"}})

    def test_apply_overlays_rules(self) -> None:
        descriptors = RecordSchema(rules={"label": "last,2"}).apply(Coordinates)

        assert descriptors[0].directive == MaskDirective("last", ("2",))
        assert not descriptors[1].is_masked

    def test_apply_overrides_annotations(self) -> None:
        schema = RecordSchema(rules={"cvv": {"mask": "first,1", "mask_tag": "?"}})

        descriptors = schema.apply(ChildRecord)

        assert descriptors[0].directive == MaskDirective("corners", ("5-4",))
        assert descriptors[1].directive == MaskDirective("first", ("1",))
        assert descriptors[1].mask_char == "?"

    def test_rule_without_mask_disables_masking(self) -> None:
        descriptors = RecordSchema(rules={"cvv": {}}).apply(ChildRecord)

        assert not descriptors[1].is_masked

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(SchemaError, match="no field"):
            RecordSchema(rules={"altitude": "all"}).apply(Coordinates)


class TestResolveType:
    def test_resolves_class(self) -> None:
        assert resolve_type("tests.utils.records:Coordinates") is Coordinates

    @pytest.mark.parametrize(
        "path",
        [
            "tests.utils.records",
            ":Coordinates",
            "tests.utils.records:",
            "tests.utils.missing_module:Coordinates",
            "tests.utils.records:Missing",
            "tests.utils.records:build_wallet",
        ],
    )
    def test_invalid_paths(self, path: str) -> None:
        with pytest.raises(SchemaError):
            resolve_type(path)


class TestLoadSchemas:
    def test_loads_yaml(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "schemas.yaml"
        schema_file.write_text(
            "tests.utils.records:Coordinates:\n"
            "  label: all\n"
            "tests.utils.records:ChildRecord:\n"
            "  cvv:\n"
            "    mask: last,1\n"
            "    mask_tag: '#'\n"
        )

        schemas = load_schemas(schema_file)

        assert schemas[Coordinates].rules == {"label": FieldRule(mask="all")}
        assert schemas[ChildRecord].rules["cvv"] == FieldRule(mask="last,1", mask_tag="#")

    def test_engine_loads_schema_file(self, tmp_path: Path, masker: StructMasker) -> None:
        schema_file = tmp_path / "schemas.yaml"
        schema_file.write_text("tests.utils.records:Coordinates:\n  label: all\n")

        masker.load_schemas(schema_file)

        assert masker.mask_record(Coordinates("home", 1.0, 2.0)).label == "****"

    def test_empty_file(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "empty.yaml"
        schema_file.write_text("")

        assert load_schemas(schema_file) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_schemas(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "broken.yaml"
        schema_file.write_text("a: [unclosed\n")

        with pytest.raises(SchemaError, match="Invalid YAML"):
            load_schemas(schema_file)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "list.yaml"
        schema_file.write_text("- one\n- two\n")

        with pytest.raises(SchemaError):
            load_schemas(schema_file)

    def test_invalid_rules(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "rules.yaml"
        schema_file.write_text("tests.utils.records:Coordinates:\n  label: [1, 2]\n")

        with pytest.raises(SchemaError, match="Invalid rules"):
            load_schemas(schema_file)
