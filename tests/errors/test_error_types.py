"""Tests for the error taxonomy and Result types."""

import pytest

from schemakit.errors import (
    Err,
    ErrorCode,
    InvalidPayloadError,
    NoAttributeError,
    NoPayloadError,
    Ok,
    SchemaKitError,
    SchemaNotDefinedError,
    ValidationError,
    try_result,
)


class TestErrorCode:
    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (ErrorCode.E2000_VALIDATION_GENERIC, 400),
            (ErrorCode.E2030_INVALID_REQUEST, 400),
            (ErrorCode.E2031_INVALID_RESPONSE, 500),
            (ErrorCode.E4020_NO_ATTRIBUTE, 422),
            (ErrorCode.E4021_SCHEMA_MISMATCH, 500),
            (ErrorCode.E9010_SCHEMA_NOT_DEFINED, 500),
        ],
    )
    def test_http_status(self, code: ErrorCode, status: int) -> None:
        assert code.http_status == status

    def test_category(self) -> None:
        assert ErrorCode.E2002_INVALID_FORMAT.category == "validation"
        assert ErrorCode.E4022_INVALID_PAYLOAD.category == "schema"
        assert ErrorCode.E9011_NO_PAYLOAD.category == "internal"


class TestErrors:
    def test_kinds_are_distinguishable(self) -> None:
        kinds = [ValidationError, NoAttributeError, InvalidPayloadError, SchemaNotDefinedError, NoPayloadError]
        assert all(issubclass(kind, SchemaKitError) for kind in kinds)
        assert len({kind.code for kind in kinds}) == len(kinds)

    def test_default_message(self) -> None:
        assert str(NoPayloadError()) == "No payload available"

    def test_validation_error_from_errors(self) -> None:
        error = ValidationError.from_errors(["name is required", "age: x is not Integer"])
        assert error.messages == ["name is required", "age: x is not Integer"]
        assert str(error) == "name is required\nage: x is not Integer"

    def test_validation_error_single_message(self) -> None:
        error = ValidationError("Response schema does not match")
        assert error.messages == ["Response schema does not match"]

    def test_validation_error_to_dict(self) -> None:
        body = ValidationError.from_errors(["a", "b"]).to_dict()["error"]
        assert body["code"] == "E2000_VALIDATION_GENERIC"
        assert body["type"] == "ValidationError"
        assert body["errors"] == ["a", "b"]
        assert body["error_count"] == 2

    def test_no_attribute_error(self) -> None:
        error = NoAttributeError("nickname", "Person")
        assert error.message == "No attribute 'nickname' on Person"
        assert error.metadata == {"attribute": "nickname", "schema": "Person"}
        assert str(NoAttributeError("x")) == "No attribute 'x'"


class TestResult:
    def test_ok(self) -> None:
        result = Ok(1)
        assert result.is_ok()
        assert result.unwrap() == 1
        assert result.map(lambda v: v + 1) == Ok(2)

    def test_err(self) -> None:
        result = Err("boom")
        assert result.is_err()
        assert result.unwrap_or(5) == 5
        with pytest.raises(ValueError):
            result.unwrap()

    def test_try_result_captures_schemakit_errors(self) -> None:
        def fail() -> None:
            raise NoPayloadError()

        result = try_result(fail)
        assert isinstance(result.unwrap_err(), NoPayloadError)

    def test_try_result_propagates_other_errors(self) -> None:
        def fail() -> None:
            raise KeyError("x")

        with pytest.raises(KeyError):
            try_result(fail)
