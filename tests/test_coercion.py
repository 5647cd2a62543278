"""Tests for the default coercers."""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from paramtree.errors import ErrorCode
from paramtree.types import (
    Base64Type,
    BooleanType,
    DateTimeType,
    DateType,
    DecimalType,
    FloatType,
    IntegerType,
    JsonType,
    ListType,
    MapType,
    StringType,
    UUIDType,
    build_default_types,
)

pytestmark = [pytest.mark.unit]


class TestScalars:

    @pytest.mark.parametrize("raw,expected", [("42", 42), (" 7 ", 7), (3, 3), (4.0, 4)])
    def test_integer_accepts(self, raw, expected):
        assert IntegerType()(raw).unwrap() == expected

    @pytest.mark.parametrize("raw", ["4.5", "abc", True, [1]])
    def test_integer_rejects(self, raw):
        assert IntegerType()(raw).is_err()

    def test_integer_error_codes(self):
        assert IntegerType()("abc").unwrap_err().code == ErrorCode.E2002_INVALID_FORMAT
        assert IntegerType()([1]).unwrap_err().code == ErrorCode.E2004_INVALID_TYPE

    def test_float_and_decimal(self):
        assert FloatType()("1.5").unwrap() == 1.5
        assert DecimalType()("0.10").unwrap() == Decimal("0.10")
        assert DecimalType()("ten").is_err()

    def test_string(self):
        assert StringType()(12).unwrap() == "12"
        assert StringType()(True).unwrap() == "true"
        assert StringType()({"a": 1}).is_err()

    @pytest.mark.parametrize("raw,expected", [("true", True), ("No", False), ("1", True), (False, False)])
    def test_boolean(self, raw, expected):
        assert BooleanType()(raw).unwrap() is expected

    def test_strict_boolean(self):
        assert BooleanType(strict=True)("yes").is_err()
        assert BooleanType(strict=True)("TRUE").unwrap() is True

    def test_strict_boolean_from_registry(self):
        registry = build_default_types(strict_booleans=True)
        assert registry.resolve("boolean")("on").is_err()


class TestContainers:

    def test_list(self):
        assert ListType()(("a", "b")).unwrap() == ["a", "b"]
        assert ListType()("a").unwrap_err().code == ErrorCode.E2004_INVALID_TYPE

    def test_map(self):
        assert MapType()({"a": 1}).unwrap() == {"a": 1}
        assert MapType()([("a", 1)]).is_err()

    def test_json(self):
        assert JsonType()('{"a": [1, 2]}').unwrap() == {"a": [1, 2]}
        assert JsonType()("{oops").is_err()

    def test_base64(self):
        assert Base64Type()("aGVsbG8=").unwrap() == "hello"
        assert Base64Type()("not base64!").is_err()


class TestTemporalAndIds:

    def test_datetime_iso_with_z_suffix(self):
        value = DateTimeType()("2024-01-02T03:04:05Z").unwrap()
        assert value == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_datetime_format_option(self):
        value = DateTimeType()("02/01/2024 10:00", {"format": "%d/%m/%Y %H:%M"}).unwrap()
        assert value == datetime(2024, 1, 2, 10, 0)

    def test_date(self):
        assert DateType()("2024-02-29").unwrap() == date(2024, 2, 29)
        assert DateType()("2023-02-29").is_err()

    def test_uuid(self):
        raw = "12345678-1234-5678-1234-567812345678"
        assert UUIDType()(raw).unwrap() == UUID(raw)
        assert UUIDType()("nope").is_err()
