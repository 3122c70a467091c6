"""Tests for the error taxonomy and payload conversion."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from combined_mcp_server.errors import (
    AppError,
    ConfigValidationError,
    FieldError,
    to_error_payload,
)


class _Required(BaseModel):
    TOKEN: str


def _validation_error() -> ValidationError:
    with pytest.raises(ValidationError) as excinfo:
        _Required()
    return excinfo.value


class TestConfigValidationError:
    def test_message_and_details(self) -> None:
        err = ConfigValidationError(
            [
                FieldError("PORT", "must be an integer", "abc"),
                FieldError("DEFAULT_LANGUAGE", "must match pattern ^[a-z]{2}(-[A-Z]{2})?$", "ENG"),
            ]
        )
        assert err.code == "CONFIG_INVALID"
        assert str(err) == "Invalid configuration: PORT, DEFAULT_LANGUAGE"
        assert err.details == {
            "fields": {
                "PORT": "must be an integer",
                "DEFAULT_LANGUAGE": "must match pattern ^[a-z]{2}(-[A-Z]{2})?$",
            }
        }

    def test_report_has_one_line_per_field(self) -> None:
        err = ConfigValidationError(
            [FieldError("PORT", "must be an integer", "abc"), FieldError("TOKEN", "required but not set")]
        )
        assert err.report().splitlines() == [
            "  - PORT: must be an integer (got 'abc')",
            "  - TOKEN: required but not set",
        ]

    def test_missing_field_from_pydantic(self) -> None:
        err = ConfigValidationError.from_validation_error(_validation_error())
        assert err.fields == ["TOKEN"]
        assert err.errors[0].reason == "required but not set"
        assert err.errors[0].value is None

    def test_is_an_app_error(self) -> None:
        err = ConfigValidationError([FieldError("PORT", "must be an integer")])
        assert isinstance(err, AppError)
        with pytest.raises(AppError):
            raise err


class TestToErrorPayload:
    def test_app_error(self) -> None:
        err = ConfigValidationError([FieldError("PORT", "must be an integer", "abc")])
        payload = to_error_payload(err)
        assert payload["code"] == "CONFIG_INVALID"
        assert payload["details"]["fields"] == {"PORT": "must be an integer"}

    def test_path_hint_does_not_mutate_error(self) -> None:
        err = ConfigValidationError([FieldError("PORT", "must be an integer")])
        payload = to_error_payload(err, path_hint=".env")
        assert payload["details"]["path"] == ".env"
        assert "path" not in err.details

    def test_generic_exception(self) -> None:
        payload = to_error_payload(ValueError("boom"), path_hint="/tmp/x")
        assert payload == {"code": "INTERNAL", "message": "boom", "details": {"path": "/tmp/x"}}
