"""The `devices` list of a profile.

Owns many `DeviceProfile` entries and answers per-device questions for
hardware that may not have an entry yet: in that case the answer is whatever
a fresh entry with just the identifiers would say, so identity-based
defaults apply to unconfigured devices too.

Entries skipped under the `skip` policy are kept as raw JSON and written
back at their original positions.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Iterator, Optional

from keyremap.core.config import devices_file_path, invalid_device_policy, load_document, save_document_atomic
from keyremap.core.config.paths import INVALID_DEVICE_POLICIES

from .device import DeviceProfile
from .device_identifiers import DeviceIdentifiers
from .errors import CollaboratorError, NotAnArrayError, SchemaError

logger = logging.getLogger(__name__)


def _fresh(identifiers: DeviceIdentifiers) -> DeviceProfile:
    return DeviceProfile({"identifiers": identifiers.to_json()})


class DeviceProfiles:
    def __init__(self, json_value: Any = None, *, on_error: Optional[str] = None):
        # DeviceProfile for valid entries, raw JSON for skipped ones.
        self._entries: list[Any] = []
        self._document: dict = {}
        self._loaded_ok = True

        if on_error is None:
            policy = invalid_device_policy()
        elif on_error in INVALID_DEVICE_POLICIES:
            policy = on_error
        else:
            raise ValueError(f"on_error must be one of {INVALID_DEVICE_POLICIES}, not {on_error!r}")

        if json_value is None:
            return
        if not isinstance(json_value, list):
            raise NotAnArrayError(json_value)

        for i, entry in enumerate(json_value):
            try:
                self._entries.append(DeviceProfile(entry))
            except SchemaError as e:
                key = f"devices[{i}]"
                if policy != "skip":
                    raise CollaboratorError(key, e) from e
                logger.warning("Skipping invalid device entry %s: %s", key, e.message)
                self._entries.append(copy.deepcopy(entry))

    @classmethod
    def load(cls, path: Optional[Path] = None, *, on_error: Optional[str] = None) -> "DeviceProfiles":
        """Load devices from a JSON document `{"devices": [...]}`.

        Keys other than `devices` are kept and written back by `save()`.
        An unreadable file yields an empty list that `save()` refuses to
        write over the original.
        """

        path = path or devices_file_path()
        document = load_document(path, logger=logger)
        loaded_ok = document is not None
        if document is None:
            document = {}

        try:
            devices = cls(document.get("devices"), on_error=on_error)
        except NotAnArrayError as e:
            raise CollaboratorError("devices", e) from e
        devices._document = document
        devices._loaded_ok = loaded_ok
        logger.debug("Loaded %d device entries from %s", len(devices), path)
        return devices

    def save(self, path: Optional[Path] = None, *, force: bool = False) -> bool:
        """Write the document back; returns True on success.

        After a failed load, nothing is written unless `force` is set.
        """

        path = path or devices_file_path()
        if not self._loaded_ok and not force:
            logger.warning("Not saving %s: it could not be read when loaded", path)
            return False

        document = copy.deepcopy(self._document)
        document["devices"] = self.to_json()
        if not save_document_atomic(path, document, logger=logger):
            return False
        self._loaded_ok = True
        return True

    def to_json(self) -> list:
        return [e.to_json() if isinstance(e, DeviceProfile) else copy.deepcopy(e) for e in self._entries]

    @property
    def skipped_count(self) -> int:
        return sum(1 for e in self._entries if not isinstance(e, DeviceProfile))

    def _devices(self) -> list[DeviceProfile]:
        return [e for e in self._entries if isinstance(e, DeviceProfile)]

    def __len__(self) -> int:
        return len(self._devices())

    def __iter__(self) -> Iterator[DeviceProfile]:
        return iter(self._devices())

    def find(self, identifiers: DeviceIdentifiers) -> Optional[DeviceProfile]:
        for d in self._devices():
            if d.identifiers == identifiers:
                return d
        return None

    def add_device(self, identifiers: DeviceIdentifiers) -> DeviceProfile:
        d = self.find(identifiers)
        if d is None:
            d = _fresh(identifiers)
            self._entries.append(d)
        return d

    def get_ignore(self, identifiers: DeviceIdentifiers) -> bool:
        return (self.find(identifiers) or _fresh(identifiers)).ignore

    def set_ignore(self, identifiers: DeviceIdentifiers, value: bool) -> None:
        self.add_device(identifiers).ignore = value

    def get_manipulate_caps_lock_led(self, identifiers: DeviceIdentifiers) -> bool:
        return (self.find(identifiers) or _fresh(identifiers)).manipulate_caps_lock_led

    def set_manipulate_caps_lock_led(self, identifiers: DeviceIdentifiers, value: bool) -> None:
        self.add_device(identifiers).manipulate_caps_lock_led = value

    def get_delay_milliseconds_before_open_device(self, identifiers: DeviceIdentifiers) -> int:
        return (self.find(identifiers) or _fresh(identifiers)).delay_milliseconds_before_open_device

    def set_delay_milliseconds_before_open_device(self, identifiers: DeviceIdentifiers, value: int) -> None:
        self.add_device(identifiers).delay_milliseconds_before_open_device = value

    def get_disable_built_in_keyboard_if_exists(self, identifiers: DeviceIdentifiers) -> bool:
        return (self.find(identifiers) or _fresh(identifiers)).disable_built_in_keyboard_if_exists

    def set_disable_built_in_keyboard_if_exists(self, identifiers: DeviceIdentifiers, value: bool) -> None:
        self.add_device(identifiers).disable_built_in_keyboard_if_exists = value
