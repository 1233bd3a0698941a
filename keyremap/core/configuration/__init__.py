"""Typed per-device configuration read from profile JSON."""

from __future__ import annotations

from .device import DeviceProfile, make_default_fn_function_keys_json
from .device_identifiers import DeviceIdentifiers
from .devices import DeviceProfiles
from .errors import (
    CollaboratorError,
    MissingFieldError,
    NotAnArrayError,
    NotAnObjectError,
    SchemaError,
    WrongFieldTypeError,
)
from .simple_modifications import SimpleModifications


__all__ = [
    "CollaboratorError",
    "DeviceIdentifiers",
    "DeviceProfile",
    "DeviceProfiles",
    "MissingFieldError",
    "NotAnArrayError",
    "NotAnObjectError",
    "SchemaError",
    "SimpleModifications",
    "WrongFieldTypeError",
    "make_default_fn_function_keys_json",
]
