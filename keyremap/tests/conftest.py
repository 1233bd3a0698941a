from __future__ import annotations

import os
import tempfile

import pytest


# Safety default: during pytest, avoid touching the user's real config.
os.environ.setdefault(
    "KEYREMAP_CONFIG_DIR",
    tempfile.mkdtemp(prefix="keyremap-test-config-"),
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("KEYREMAP_DEVICES_PATH", raising=False)
    monkeypatch.delenv("KEYREMAP_INVALID_DEVICE_POLICY", raising=False)


@pytest.fixture
def device_json_factory():
    """Factory for a minimal device object with the given identifiers."""

    def _make(
        *,
        vendor_id: int = 0x046D,
        product_id: int = 0xC52B,
        is_keyboard: bool = True,
        is_pointing_device: bool = False,
        **extra,
    ) -> dict:
        out = {
            "identifiers": {
                "vendor_id": vendor_id,
                "product_id": product_id,
                "is_keyboard": is_keyboard,
                "is_pointing_device": is_pointing_device,
            },
        }
        out.update(extra)
        return out

    return _make
