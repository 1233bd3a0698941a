#!/usr/bin/env python3
"""Unit tests for the profile device list (core/configuration/devices.py)."""

from __future__ import annotations

import json
import logging

import pytest

from keyremap.core.configuration import (
    CollaboratorError,
    DeviceIdentifiers,
    DeviceProfiles,
    NotAnArrayError,
    WrongFieldTypeError,
)

APPLE_KEYBOARD = DeviceIdentifiers(vendor_id=0x05AC, product_id=0x0262, is_keyboard=True)
MOUSE = DeviceIdentifiers(vendor_id=0x046D, product_id=0xC077, is_pointing_device=True)
YUBIKEY = DeviceIdentifiers(vendor_id=0x1050, product_id=0x0407, is_keyboard=True)


def test_empty_by_default():
    devices = DeviceProfiles()
    assert len(devices) == 0
    assert devices.to_json() == []


def test_non_array_is_rejected():
    with pytest.raises(NotAnArrayError):
        DeviceProfiles({"identifiers": {}})


def test_invalid_entry_raises_with_index(device_json_factory):
    with pytest.raises(CollaboratorError) as exc:
        DeviceProfiles([device_json_factory(), device_json_factory(ignore="yes")], on_error="raise")

    assert exc.value.key == "devices[1]"
    assert isinstance(exc.value.inner, WrongFieldTypeError)
    assert str(exc.value).startswith("`devices[1]` error: `ignore` must be boolean")


def test_invalid_entry_is_skipped_and_logged(device_json_factory, caplog):
    with caplog.at_level(logging.WARNING, logger="keyremap.core.configuration.devices"):
        devices = DeviceProfiles(
            [device_json_factory(ignore="yes"), device_json_factory(product_id=1)],
            on_error="skip",
        )

    assert len(devices) == 1
    assert list(devices)[0].identifiers.product_id == 1
    assert any("devices[0]" in r.getMessage() for r in caplog.records)


def test_policy_comes_from_environment(monkeypatch, device_json_factory):
    monkeypatch.setenv("KEYREMAP_INVALID_DEVICE_POLICY", "SKIP")
    devices = DeviceProfiles([device_json_factory(ignore=1)])
    assert len(devices) == 0


def test_unknown_devices_use_identity_defaults():
    devices = DeviceProfiles()

    assert devices.get_ignore(MOUSE) is True
    assert devices.get_ignore(YUBIKEY) is True
    assert devices.get_ignore(APPLE_KEYBOARD) is False
    assert devices.get_manipulate_caps_lock_led(APPLE_KEYBOARD) is True
    assert devices.get_delay_milliseconds_before_open_device(APPLE_KEYBOARD) == 3000
    assert devices.get_disable_built_in_keyboard_if_exists(APPLE_KEYBOARD) is False
    # Lookups never add entries.
    assert len(devices) == 0


def test_configured_devices_are_found():
    devices = DeviceProfiles([{"identifiers": YUBIKEY.to_json(), "ignore": False}])

    assert devices.find(YUBIKEY) is not None
    assert devices.find(MOUSE) is None
    assert devices.get_ignore(YUBIKEY) is False


def test_setters_add_missing_devices_once():
    devices = DeviceProfiles()
    devices.set_ignore(MOUSE, False)
    devices.set_delay_milliseconds_before_open_device(MOUSE, 500)
    devices.set_manipulate_caps_lock_led(APPLE_KEYBOARD, False)
    devices.set_disable_built_in_keyboard_if_exists(APPLE_KEYBOARD, True)

    assert len(devices) == 2
    assert devices.get_ignore(MOUSE) is False
    assert devices.get_delay_milliseconds_before_open_device(MOUSE) == 500
    assert devices.get_manipulate_caps_lock_led(APPLE_KEYBOARD) is False
    assert devices.get_disable_built_in_keyboard_if_exists(APPLE_KEYBOARD) is True


def test_add_device_returns_existing_entry():
    devices = DeviceProfiles()
    first = devices.add_device(MOUSE)
    assert devices.add_device(MOUSE) is first


class TestLoadSave:
    def test_missing_file_loads_empty(self, tmp_path):
        devices = DeviceProfiles.load(tmp_path / "devices.json")
        assert len(devices) == 0

    def test_load_save_preserves_other_keys(self, tmp_path, device_json_factory):
        path = tmp_path / "devices.json"
        path.write_text(
            json.dumps({"title": "work", "devices": [device_json_factory(future_feature=42)]}),
            encoding="utf-8",
        )

        devices = DeviceProfiles.load(path)
        devices.set_ignore(MOUSE, True)
        assert devices.save(path) is True

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["title"] == "work"
        assert len(saved["devices"]) == 2
        assert saved["devices"][0]["future_feature"] == 42
        assert saved["devices"][1]["ignore"] is True

    def test_default_path_comes_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        monkeypatch.setenv("KEYREMAP_DEVICES_PATH", str(path))

        devices = DeviceProfiles()
        devices.add_device(APPLE_KEYBOARD)
        devices.save()

        assert len(DeviceProfiles.load()) == 1

    def test_devices_key_must_be_array(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text(json.dumps({"devices": {}}), encoding="utf-8")

        with pytest.raises(CollaboratorError) as exc:
            DeviceProfiles.load(path)
        assert exc.value.key == "devices"

    def test_unreadable_file_loads_empty(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text("{not json", encoding="utf-8")

        devices = DeviceProfiles.load(path)
        assert len(devices) == 0


@pytest.mark.parametrize("value", ["skp", "SKIP", "", "ignore"])
def test_unknown_policy_is_rejected(value, device_json_factory):
    with pytest.raises(ValueError):
        DeviceProfiles([device_json_factory()], on_error=value)


class TestSkippedEntriesRoundTrip:
    def test_skipped_entries_are_written_back_in_place(self, device_json_factory):
        bad = {"identifiers": {}, "ignore": "yes", "future_feature": 42}
        devices = DeviceProfiles(
            [device_json_factory(product_id=1), bad, device_json_factory(product_id=2)],
            on_error="skip",
        )

        assert len(devices) == 2
        assert devices.skipped_count == 1

        out = devices.to_json()
        assert len(out) == 3
        assert out[1] == bad
        assert out[0]["identifiers"]["product_id"] == 1
        assert out[2]["identifiers"]["product_id"] == 2

    def test_skip_load_then_save_keeps_every_entry(self, tmp_path, device_json_factory):
        path = tmp_path / "devices.json"
        bad = {"identifiers": {}, "ignore": "yes"}
        path.write_text(json.dumps({"devices": [device_json_factory(), bad]}), encoding="utf-8")

        devices = DeviceProfiles.load(path, on_error="skip")
        devices.set_ignore(MOUSE, True)
        assert devices.save(path) is True

        saved = json.loads(path.read_text(encoding="utf-8"))["devices"]
        assert len(saved) == 3
        assert saved[1] == bad
        assert saved[2]["ignore"] is True


class TestUnreadableFileIsNotOverwritten:
    def test_truncated_file_is_left_untouched(self, tmp_path, device_json_factory):
        path = tmp_path / "devices.json"
        original = json.dumps({"devices": [device_json_factory()], "other": 1})[:-1]
        path.write_text(original, encoding="utf-8")

        devices = DeviceProfiles.load(path)
        devices.set_ignore(MOUSE, True)

        assert devices.save(path) is False
        assert path.read_text(encoding="utf-8") == original

    def test_non_object_file_is_left_untouched(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        devices = DeviceProfiles.load(path)

        assert devices.save(path) is False
        assert path.read_text(encoding="utf-8") == "[1, 2, 3]"

    def test_refusal_is_logged(self, tmp_path, caplog):
        path = tmp_path / "devices.json"
        path.write_text("{", encoding="utf-8")
        devices = DeviceProfiles.load(path)

        with caplog.at_level(logging.WARNING, logger="keyremap.core.configuration.devices"):
            devices.save(path)

        assert any("Not saving" in r.getMessage() for r in caplog.records)

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "devices.json"
        path.write_text("{", encoding="utf-8")

        devices = DeviceProfiles.load(path)
        devices.add_device(APPLE_KEYBOARD)

        assert devices.save(path, force=True) is True
        assert len(json.loads(path.read_text(encoding="utf-8"))["devices"]) == 1
        # A successful write makes later saves normal again.
        assert devices.save(path) is True
