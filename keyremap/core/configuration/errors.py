"""Errors raised while reading device configuration JSON.

Every failure is fail-fast: the first violation aborts construction and the
message names the offending key so callers can surface it directly.
"""

from __future__ import annotations

from typing import Any

from .json_helpers import dump


class SchemaError(Exception):
    code = "SCHEMA_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAnObjectError(SchemaError):
    code = "NOT_AN_OBJECT"

    def __init__(self, value: Any):
        super().__init__(f"json must be object, but is `{dump(value)}`")
        self.value = value


class NotAnArrayError(SchemaError):
    code = "NOT_AN_ARRAY"

    def __init__(self, value: Any):
        super().__init__(f"json must be array, but is `{dump(value)}`")
        self.value = value


class WrongFieldTypeError(SchemaError):
    code = "WRONG_FIELD_TYPE"

    def __init__(self, key: str, expected_kind: str, actual_value: Any):
        super().__init__(f"`{key}` must be {expected_kind}, but is `{dump(actual_value)}`")
        self.key = key
        self.expected_kind = expected_kind
        self.actual_value = actual_value


class MissingFieldError(SchemaError):
    code = "MISSING_FIELD"

    def __init__(self, key: str):
        super().__init__(f"`{key}` must be specified")
        self.key = key


class CollaboratorError(SchemaError):
    """A nested schema error, prefixed with the key it was found under."""

    code = "COLLABORATOR_ERROR"

    def __init__(self, key: str, inner: SchemaError):
        super().__init__(f"`{key}` error: {inner.message}")
        self.key = key
        self.inner = inner
