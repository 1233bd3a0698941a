#!/usr/bin/env python3
"""Per-device configuration entry.

A `DeviceProfile` is built from one object of a profile's `devices` array.
Recognized keys are validated and copied into typed fields; everything else
is left in the retained document so `to_json()` can write it back untouched.

Some defaults depend on the device identity (pointing devices, the Touch Bar
and YubiKey tokens are ignored; Apple keyboards get caps lock LED handling).
Those are decided only after the whole object has been read, so the result
does not depend on key order.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from .defaults import (
    DEFAULTS,
    FN_FUNCTION_KEY_COUNT,
    TOUCH_BAR_PRODUCT_ID,
    TOUCH_BAR_VENDOR_ID,
    YUBICO_VENDOR_ID,
)
from .device_identifiers import DeviceIdentifiers
from .errors import CollaboratorError, MissingFieldError, NotAnObjectError, SchemaError, WrongFieldTypeError
from .json_helpers import is_boolean, is_number, is_object
from .simple_modifications import SimpleModifications

logger = logging.getLogger(__name__)


def make_default_fn_function_keys_json() -> list:
    return [{"from": {"key_code": f"f{i}"}, "to": {}} for i in range(1, FN_FUNCTION_KEY_COUNT + 1)]


def _default_ignore(identifiers: DeviceIdentifiers) -> str | None:
    """Return why a device is ignored by default, or None."""

    if identifiers.is_pointing_device:
        return "pointing device"
    if identifiers.vendor_id == TOUCH_BAR_VENDOR_ID and identifiers.product_id == TOUCH_BAR_PRODUCT_ID:
        return "touch bar"
    if identifiers.vendor_id == YUBICO_VENDOR_ID:
        return "security token"
    return None


class DeviceProfile:
    """Configuration for one physical input device."""

    def __init__(self, json_value: Any):
        self._ignore: bool = DEFAULTS["ignore"]
        self._manipulate_caps_lock_led: bool = DEFAULTS["manipulate_caps_lock_led"]
        self._delay_milliseconds_before_open_device: int = DEFAULTS["delay_milliseconds_before_open_device"]
        self._disable_built_in_keyboard_if_exists: bool = DEFAULTS["disable_built_in_keyboard_if_exists"]
        self._simple_modifications = SimpleModifications()
        self._fn_function_keys = SimpleModifications()
        self._fn_function_keys.update(make_default_fn_function_keys_json())

        if not is_object(json_value):
            raise NotAnObjectError(json_value)

        self._json = copy.deepcopy(json_value)

        identifiers: DeviceIdentifiers | None = None
        ignore_configured = False
        manipulate_caps_lock_led_configured = False

        for key, value in json_value.items():
            if key == "identifiers":
                try:
                    identifiers = DeviceIdentifiers.from_json(value)
                except SchemaError as e:
                    raise CollaboratorError(key, e) from e

            elif key == "ignore":
                if not is_boolean(value):
                    raise WrongFieldTypeError(key, "boolean", value)
                self._ignore = value
                ignore_configured = True

            elif key == "manipulate_caps_lock_led":
                if not is_boolean(value):
                    raise WrongFieldTypeError(key, "boolean", value)
                self._manipulate_caps_lock_led = value
                manipulate_caps_lock_led_configured = True

            elif key == "delay_milliseconds_before_open_device":
                if not is_number(value):
                    raise WrongFieldTypeError(key, "number", value)
                # Negative and fractional values are accepted; fractions truncate toward zero.
                self._delay_milliseconds_before_open_device = int(value)

            elif key == "disable_built_in_keyboard_if_exists":
                if not is_boolean(value):
                    raise WrongFieldTypeError(key, "boolean", value)
                self._disable_built_in_keyboard_if_exists = value

            elif key == "simple_modifications":
                try:
                    self._simple_modifications.update(value)
                except SchemaError as e:
                    raise CollaboratorError(key, e) from e

            elif key == "fn_function_keys":
                try:
                    self._fn_function_keys.update(value)
                except SchemaError as e:
                    raise CollaboratorError(key, e) from e

        if identifiers is None:
            raise MissingFieldError("identifiers")
        self._identifiers = identifiers

        if not ignore_configured:
            reason = _default_ignore(identifiers)
            if reason is not None:
                logger.debug(
                    "Ignoring device %04x:%04x by default (%s)",
                    identifiers.vendor_id,
                    identifiers.product_id,
                    reason,
                )
                self._ignore = True

        if not manipulate_caps_lock_led_configured:
            if identifiers.is_keyboard and identifiers.is_apple():
                logger.debug(
                    "Enabling caps lock LED manipulation by default for %04x:%04x",
                    identifiers.vendor_id,
                    identifiers.product_id,
                )
                self._manipulate_caps_lock_led = True

    def to_json(self) -> dict:
        j = copy.deepcopy(self._json)
        j["identifiers"] = self._identifiers.to_json()
        j["ignore"] = self._ignore
        j["manipulate_caps_lock_led"] = self._manipulate_caps_lock_led
        j["delay_milliseconds_before_open_device"] = self._delay_milliseconds_before_open_device
        j["disable_built_in_keyboard_if_exists"] = self._disable_built_in_keyboard_if_exists
        j["simple_modifications"] = self._simple_modifications.to_json()
        j["fn_function_keys"] = self._fn_function_keys.to_json()
        return j

    @property
    def raw_document(self) -> dict:
        return copy.deepcopy(self._json)

    @property
    def identifiers(self) -> DeviceIdentifiers:
        return self._identifiers

    @property
    def ignore(self) -> bool:
        return self._ignore

    @ignore.setter
    def ignore(self, value: bool) -> None:
        self._ignore = value

    @property
    def manipulate_caps_lock_led(self) -> bool:
        return self._manipulate_caps_lock_led

    @manipulate_caps_lock_led.setter
    def manipulate_caps_lock_led(self, value: bool) -> None:
        self._manipulate_caps_lock_led = value

    @property
    def delay_milliseconds_before_open_device(self) -> int:
        return self._delay_milliseconds_before_open_device

    @delay_milliseconds_before_open_device.setter
    def delay_milliseconds_before_open_device(self, value: int) -> None:
        self._delay_milliseconds_before_open_device = value

    @property
    def disable_built_in_keyboard_if_exists(self) -> bool:
        return self._disable_built_in_keyboard_if_exists

    @disable_built_in_keyboard_if_exists.setter
    def disable_built_in_keyboard_if_exists(self, value: bool) -> None:
        self._disable_built_in_keyboard_if_exists = value

    @property
    def simple_modifications(self) -> SimpleModifications:
        return self._simple_modifications

    @simple_modifications.setter
    def simple_modifications(self, value: SimpleModifications) -> None:
        self._simple_modifications = value

    @property
    def fn_function_keys(self) -> SimpleModifications:
        return self._fn_function_keys

    @fn_function_keys.setter
    def fn_function_keys(self, value: SimpleModifications) -> None:
        self._fn_function_keys = value
