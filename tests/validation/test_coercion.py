"""Tests for explicit opt-in coercion."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from schemakit.errors import Err, Ok
from schemakit.validation import (
    CoercionError,
    CoercionRule,
    ExplicitCoercion,
    Schema,
    StringToInt,
    coerce,
    coerce_or_none,
)


class TestRules:
    def test_string_to_int(self) -> None:
        assert StringToInt()(" 42 ") == Ok(42)

    def test_string_to_int_failure(self) -> None:
        result = StringToInt()("forty")
        assert result.is_err()
        assert isinstance(result.unwrap_err(), CoercionError)

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("0", False), ("Yes", True), ("off", False)])
    def test_string_to_bool(self, raw: str, expected: bool) -> None:
        assert coerce(raw, bool) == Ok(expected)

    def test_string_to_bool_rejects_unknown(self) -> None:
        assert coerce("maybe", bool).is_err()

    def test_float_from_int(self) -> None:
        assert coerce(2, float) == Ok(2.0)

    def test_decimal(self) -> None:
        assert coerce("1.50", Decimal) == Ok(Decimal("1.50"))

    def test_datetime_with_zulu_suffix(self) -> None:
        assert coerce("2024-01-02T03:04:05Z", datetime) == Ok(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

    def test_date(self) -> None:
        assert coerce("2024-01-02", date) == Ok(date(2024, 1, 2))


class TestExplicitCoercion:
    def test_value_of_target_type_passes_through(self) -> None:
        assert coerce(5, int) == Ok(5)

    def test_bool_is_not_taken_for_int(self) -> None:
        assert isinstance(coerce(True, int), Err)

    def test_no_rule_is_an_error(self) -> None:
        assert coerce(object(), int).is_err()

    def test_coerce_or_none(self) -> None:
        assert coerce_or_none("7", int) == 7
        assert coerce_or_none("seven", int) is None

    def test_add_rule_returns_new_registry(self) -> None:
        class BytesToStr(CoercionRule[bytes, str]):
            @property
            def source_types(self) -> tuple[type, ...]:
                return (bytes,)

            @property
            def target_type(self) -> type[str]:
                return str

            def coerce(self, value):
                return Ok(value.decode())

        base = ExplicitCoercion()
        extended = base.add_rule(BytesToStr())
        assert extended.coerce(b"hi", str) == Ok("hi")
        assert base.coerce(b"hi", str).is_err()


class TestAttributeCoercion:
    def test_opt_in_attribute_converts_strings(self) -> None:
        schema = Schema("Query").attribute("page", int, coerce=True)
        assert schema.new({"page": "2"}).get("page") == 2

    def test_failed_coercion_keeps_raw_value(self) -> None:
        schema = Schema("Query").attribute("page", int, coerce=True)
        payload = schema.new({"page": "two"})
        assert payload.get("page") == "two"
        assert payload.errors == ["page: two is not Integer"]

    def test_without_opt_in_strings_are_kept(self) -> None:
        schema = Schema("Query").attribute("page", int)
        assert schema.new({"page": "2"}).errors == ["page: 2 is not Integer"]

    def test_booleans_never_become_decimals(self) -> None:
        schema = Schema("Price").attribute("amount", Decimal, coerce=True)
        payload = schema.new({"amount": True})
        assert payload.get("amount") is True
        assert not payload.is_valid()
