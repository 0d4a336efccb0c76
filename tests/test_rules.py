"""Тесты для примитивов правил."""

import pytest

from webapp_manifest.models.errors import ErrorCategory
from webapp_manifest.services.rules import (
    FORMATS,
    check_any_of,
    check_format,
    check_length,
    check_one_of,
    check_type,
    is_absolute_url,
    is_icon_path,
    is_number_like,
    is_relative_path,
    is_version,
    unexpected_keys,
)


class TestCheckType:
    @pytest.mark.parametrize(
        "value, types",
        [
            ("x", ("string",)),
            (1, ("number",)),
            (1.5, ("number",)),
            (True, ("boolean",)),
            ({}, ("object",)),
            ([], ("array",)),
            (640, ("string", "number")),
        ],
    )
    def test_matches(self, value, types):
        assert check_type("f", value, types) is None

    def test_bool_is_not_number(self):
        violation = check_type("f", True, ("number",))
        assert violation.category == ErrorCategory.INVALID_PROPERTY_TYPE

    def test_numeric_string_is_not_number(self):
        """Строки не приводятся к числу — это дело формата, а не типа."""
        assert check_type("f", "640", ("number",)) is not None

    def test_null_matches_nothing(self):
        assert check_type("f", None, ("string", "number", "boolean", "object", "array")) is not None

    def test_message_with_several_types(self):
        violation = check_type("min_width", [], ("string", "number"))
        assert violation.message == "`min_width` must be of type `string` or `number`"


class TestCheckLength:
    def test_min_one_means_not_empty(self):
        assert check_length("f", "", min_length=1).message == "`f` must not be empty"

    def test_min_other(self):
        assert check_length("f", "ab", min_length=3).message == "`f` must be at least length 3"

    def test_max(self):
        assert check_length("f", [1, 2, 3], max_length=2).message == "`f` must not exceed length 2"

    def test_within_bounds(self):
        assert check_length("f", "abc", min_length=1, max_length=3) is None

    def test_other_types_skipped(self):
        assert check_length("f", 12345, max_length=1) is None


class TestEnumerations:
    def test_one_of(self):
        assert check_one_of("role", "system", ("system", "input")) is None
        violation = check_one_of("role", "x", ("system", "input"))
        assert violation.category == ErrorCategory.INVALID_STRING_TYPE
        assert violation.message == "`role` must be one of the following: system,input"

    def test_any_of_tokens_trimmed(self):
        assert check_any_of("o", " portrait ,landscape", ("portrait", "landscape")) is None

    def test_any_of_empty_tokens_ignored(self):
        assert check_any_of("o", "portrait,,", ("portrait",)) is None

    def test_any_of_unknown_token(self):
        violation = check_any_of("o", "portrait, sideways", ("portrait", "landscape"))
        assert violation.message == "`o` must be any of the following: portrait,landscape"


class TestFormats:
    @pytest.mark.parametrize("value, expected", [("/", True), ("/index.html", True), ("//", False), ("index.html", False), ("", False)])
    def test_relative_path(self, value, expected):
        assert is_relative_path(value) is expected

    @pytest.mark.parametrize("value, expected", [("1.0", True), ("v1.0", True), ("2", True), ("v1.0!!", False), ("1..0", False), ("", False)])
    def test_version(self, value, expected):
        assert is_version(value) is expected

    @pytest.mark.parametrize(
        "value, expected",
        [("https://example.com", True), ("http://example.com/a", True), ("ftp://example.com", False), ("foo", False), ("https://", False)],
    )
    def test_absolute_url(self, value, expected):
        assert is_absolute_url(value) is expected

    @pytest.mark.parametrize("value, expected", [(640, True), ("640", True), ("12.5", True), ("NOT A NUMBER", False), (True, False)])
    def test_number_like(self, value, expected):
        assert is_number_like(value) is expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("/path/to/icon.png", True),
            ("icon.png", True),
            ("https://cdn.example.com/i.png", True),
            ("data:image/png;base64,AAAA", True),
            ("", False),
            ("//cdn.example.com/i.png", False),
            ("icon with spaces.png", False),
            (128, False),
        ],
    )
    def test_icon_path(self, value, expected):
        assert is_icon_path(value) is expected

    def test_unscoped_format(self):
        violation = check_format("launch_path", "//", "launch-path")
        assert violation.category == ErrorCategory.INVALID_LAUNCH_PATH
        assert violation.scoped is False

    def test_scoped_format(self):
        violation = check_format("min_width", "abc", "number")
        assert violation.category == ErrorCategory.INVALID_NUMBER
        assert violation.scoped is True
        assert violation.message == "`min_width` must be a number"

    def test_icon_size(self):
        assert check_format("128", "128", "icon-size") is None
        assert check_format("0", "0", "icon-size") is not None
        assert check_format("a", "a", "icon-size").message == "Icon size must be a natural number"

    def test_registry_is_fixed(self):
        assert set(FORMATS) == {"launch-path", "version", "developer-url", "number", "icon-size", "icon-path"}


def test_unexpected_keys_keep_order():
    assert unexpected_keys({"bar": 1, "to": 2, "foo": 3}, {"to": None, "from": None}) == ["bar", "foo"]
