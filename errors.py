"""Error kinds raised by the field configuration editor.

Every failure the editor can surface belongs to one of four kinds. Each
exception carries a machine-readable ``reason`` so callers can branch on it
instead of parsing message text, plus the underlying exception when there is
one.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

__all__ = [
    "ErrorKind",
    "EditorError",
    "LoadFailure",
    "SaveFailure",
    "ValidationFailure",
    "AddFailure",
]


class ErrorKind(str, Enum):
    LOAD_FAILURE = "load_failure"
    SAVE_FAILURE = "save_failure"
    VALIDATION_FAILURE = "validation_failure"
    ADD_FAILURE = "add_failure"


class EditorError(Exception):
    """Base exception for all editor failures."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.reason = reason
        self.details = details or {}
        self.cause = cause
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": self.message,
            "kind": self.kind.value,
            "reason": self.reason,
        }
        payload.update(self.details)
        return payload


class LoadFailure(EditorError):
    """The canonical configuration file could not be read."""

    kind = ErrorKind.LOAD_FAILURE

    def __init__(
        self,
        message: str = "Failed to read config file",
        *,
        reason: str = "read_error",
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, reason=reason, cause=cause)
        self.path = path


class SaveFailure(EditorError):
    """The canonical configuration file could not be written."""

    kind = ErrorKind.SAVE_FAILURE

    def __init__(
        self,
        message: str = "Failed to save configuration",
        *,
        reason: str = "write_error",
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, reason=reason, cause=cause)
        self.path = path


class ValidationFailure(EditorError):
    """An edit was rejected; the record keeps its previous value."""

    kind = ErrorKind.VALIDATION_FAILURE

    def __init__(
        self,
        message: str,
        *,
        reason: str = "duplicate_sequence",
        column: str,
        value: str,
        field_code: Optional[str] = None,
    ) -> None:
        details = {"column": column, "value": value}
        if field_code is not None:
            details["field_code"] = field_code
        super().__init__(message, reason=reason, details=details)
        self.column = column
        self.value = value
        self.field_code = field_code

    @classmethod
    def duplicate_sequence(cls, column: str, value: str, field_code: str) -> "ValidationFailure":
        return cls(
            f"Sequence number {value} is already used in {column}",
            column=column,
            value=value,
            field_code=field_code,
        )


class AddFailure(EditorError):
    """A new field could not be appended."""

    kind = ErrorKind.ADD_FAILURE

    def __init__(
        self,
        message: str = "No existing fields to reference",
        *,
        reason: str = "no_fields",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, reason=reason, details=details)
