from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from .defaults import APPLE_VENDOR_IDS
from .errors import NotAnObjectError, WrongFieldTypeError
from .json_helpers import is_boolean, is_number, is_object


@dataclass(frozen=True)
class DeviceIdentifiers:
    """Identity used to match a configuration entry to physical hardware.

    Only the four typed fields take part in equality; the raw JSON is kept so
    unknown keys survive `to_json()`.
    """

    vendor_id: int = 0
    product_id: int = 0
    is_keyboard: bool = False
    is_pointing_device: bool = False
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, json_value: Any) -> "DeviceIdentifiers":
        if not is_object(json_value):
            raise NotAnObjectError(json_value)

        values: dict[str, Any] = {}
        for key, value in json_value.items():
            if key in ("vendor_id", "product_id"):
                if not is_number(value):
                    raise WrongFieldTypeError(key, "number", value)
                values[key] = int(value)
            elif key in ("is_keyboard", "is_pointing_device"):
                if not is_boolean(value):
                    raise WrongFieldTypeError(key, "boolean", value)
                values[key] = value

        return cls(raw=copy.deepcopy(json_value), **values)

    def is_apple(self) -> bool:
        return self.vendor_id in APPLE_VENDOR_IDS

    def to_json(self) -> dict:
        j = copy.deepcopy(self.raw)
        j["vendor_id"] = self.vendor_id
        j["product_id"] = self.product_id
        j["is_keyboard"] = self.is_keyboard
        j["is_pointing_device"] = self.is_pointing_device
        return j
