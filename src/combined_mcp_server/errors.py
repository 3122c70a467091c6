"""Error classes and helpers for the Combined MCP Server.

Defines a structured application error, the configuration error raised
at startup, and a function converting exceptions into serializable
payloads suitable for tool responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, TypedDict

from pydantic import ValidationError


class ErrorPayload(TypedDict, total=False):
    code: str
    message: str
    details: Dict[str, Any]


@dataclass
class AppError(Exception):
    """Base application error with a code and optional details."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload


@dataclass(frozen=True)
class FieldError:
    """One invalid environment variable.

    Attributes:
        field: Environment variable name, e.g. 'PORT'.
        reason: Human-readable description of the violated constraint.
        value: Raw value that was rejected, or None when it was missing.
    """

    field: str
    reason: str
    value: Optional[str] = None

    def describe(self) -> str:
        if self.value is None:
            return f"{self.field}: {self.reason}"
        return f"{self.field}: {self.reason} (got {self.value!r})"


_REASONS = {
    "missing": "required but not set",
    "int_parsing": "must be an integer",
    "int_type": "must be an integer",
    "bool_parsing": "must be a boolean (true/false, 1/0, yes/no, on/off)",
    "bool_type": "must be a boolean (true/false, 1/0, yes/no, on/off)",
    "string_type": "must be a string",
}


def _field_error(entry: Dict[str, Any]) -> FieldError:
    loc = entry.get("loc") or ("<root>",)
    name = str(loc[0]).upper()
    kind = entry.get("type", "")
    if kind == "string_pattern_mismatch":
        pattern = (entry.get("ctx") or {}).get("pattern", "")
        reason = f"must match pattern {pattern}"
    else:
        reason = _REASONS.get(kind, entry.get("msg", "invalid value"))
    raw = entry.get("input")
    value = None if kind == "missing" or raw is None else str(raw)
    return FieldError(field=name, reason=reason, value=value)


class ConfigValidationError(AppError):
    """Raised when the environment does not satisfy the configuration schema.

    Carries one `FieldError` per offending variable so the whole
    configuration can be fixed in one pass.
    """

    def __init__(self, errors: Sequence[FieldError]) -> None:
        errors = tuple(errors)
        names = [e.field for e in errors]
        super().__init__(
            "CONFIG_INVALID",
            f"Invalid configuration: {', '.join(names)}",
            {"fields": {e.field: e.reason for e in errors}},
        )
        self.errors = errors

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ConfigValidationError":
        return cls([_field_error(entry) for entry in exc.errors()])

    @property
    def fields(self) -> List[str]:
        """Names of the offending variables, in schema order."""
        return [e.field for e in self.errors]

    def report(self) -> str:
        """Multi-line report with one line per offending variable."""
        return "\n".join(f"  - {e.describe()}" for e in self.errors)


def to_error_payload(
    error: Exception, *, path_hint: Optional[str] = None
) -> ErrorPayload:
    """Convert an exception into a structured error payload.

    Args:
        error: The exception to convert.
        path_hint: Optional file path that might help with diagnosis,
            e.g. the ``.env`` file that was read.

    Returns:
        A dictionary with ``code``, ``message`` and optional ``details``.

    Examples:
        >>> err = ConfigValidationError([FieldError("PORT", "must be an integer", "abc")])
        >>> to_error_payload(err)["code"]
        'CONFIG_INVALID'
    """

    if isinstance(error, AppError):
        payload = error.to_payload()
        if path_hint:
            payload.setdefault("details", {})["path"] = path_hint
        return payload
    # Fallback: wrap generic exceptions
    details: Dict[str, Any] = {}
    if path_hint:
        details["path"] = path_hint
    return {"code": "INTERNAL", "message": str(error), "details": details}
