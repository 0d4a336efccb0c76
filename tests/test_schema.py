"""Тесты для моделей схемы и загрузчика схемы."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from webapp_manifest.models.context import ValidationContext
from webapp_manifest.models.schema import ArrayField, MapField, ObjectField, ScalarField, schema_adapter
from webapp_manifest.services.schema_loader import DEFAULT_SCHEMA_PATH, load_schema

FIXTURES = Path(__file__).parent / "fixtures"


class TestFieldSpec:
    def test_kind_selects_variant(self):
        schema = schema_adapter.validate_python({
            "a": {"kind": "scalar", "type": "string"},
            "b": {"kind": "object"},
            "c": {"kind": "array", "items": {"properties": {}}},
            "d": {"kind": "map", "keys": "icon-size", "values": "icon-path"},
        })
        assert isinstance(schema["a"], ScalarField)
        assert isinstance(schema["b"], ObjectField)
        assert isinstance(schema["c"], ArrayField)
        assert isinstance(schema["d"], MapField)

    def test_single_type_becomes_tuple(self):
        spec = ScalarField.model_validate({"type": "string"})
        assert spec.type == ("string",)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            ScalarField.model_validate({"type": "integer"})

    def test_missing_kind_rejected(self):
        with pytest.raises(ValidationError):
            schema_adapter.validate_python({"a": {"type": "string"}})

    def test_one_of_and_any_of_exclusive(self):
        with pytest.raises(ValidationError):
            ScalarField.model_validate({"type": "string", "oneOf": ["a"], "anyOf": ["b"]})

    def test_frozen(self):
        spec = ScalarField.model_validate({"type": "string"})
        with pytest.raises(ValidationError):
            spec.mandatory = True

    def test_marketplace_mandatory(self):
        spec = ObjectField.model_validate({"marketplaceMandatory": True})
        assert spec.is_mandatory(ValidationContext())
        assert not spec.is_mandatory(ValidationContext(appType=""))


class TestLoadSchema:
    def test_default_schema_order(self):
        schema = load_schema()
        assert list(schema)[:3] == ["name", "description", "developer"]

    def test_default_schema_shapes(self):
        schema = load_schema(DEFAULT_SCHEMA_PATH)
        assert schema["name"].mandatory is True
        assert schema["name"].max_length == 128
        assert schema["developer"].marketplace_mandatory is True
        assert schema["developer"].additional_properties is True
        assert schema["chrome"].additional_properties is False
        assert schema["redirects"].items.additional_properties is False
        assert schema["screen_size"].at_least_one_of == ("min_height", "min_width")

    def test_loaded_once(self):
        assert load_schema(DEFAULT_SCHEMA_PATH) is load_schema(DEFAULT_SCHEMA_PATH)

    def test_custom_schema(self):
        schema = load_schema(FIXTURES / "custom.schema.yaml")
        assert list(schema) == ["name"]

    def test_unknown_format_rejected(self, tmp_path):
        path = tmp_path / "bad.schema.yaml"
        path.write_text("x:\n  kind: scalar\n  type: string\n  format: nope\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Unknown format 'nope' for field 'x'"):
            load_schema(path)

    def test_nested_unknown_format_rejected(self, tmp_path):
        path = tmp_path / "nested.schema.yaml"
        path.write_text(
            "r:\n"
            "  kind: array\n"
            "  items:\n"
            "    properties:\n"
            "      icons: {kind: map, keys: icon-size, values: nope}\n"
            "      locales: {kind: object}\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError, match=r"Unknown format 'nope' for field 'r\[\]\.icons'"):
            load_schema(path)
