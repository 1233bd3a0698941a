"""Configuration location, policy and JSON storage helpers."""

from __future__ import annotations

from .file_storage import load_document, save_document_atomic
from .paths import config_dir, devices_file_path, invalid_device_policy


__all__ = [
    "config_dir",
    "devices_file_path",
    "invalid_device_policy",
    "load_document",
    "save_document_atomic",
]
