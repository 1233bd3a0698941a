"""Config path and policy helpers.

All settings come from the environment so test harnesses can redirect them
in conftest.
"""

from __future__ import annotations

import os
from pathlib import Path

INVALID_DEVICE_POLICIES = ("raise", "skip")


def config_dir() -> Path:
    """Return the directory used for keyremap configuration.

    Priority:
    - KEYREMAP_CONFIG_DIR
    - XDG_CONFIG_HOME/keyremap
    - ~/.config/keyremap
    """

    p = os.environ.get("KEYREMAP_CONFIG_DIR")
    if p:
        return Path(p)

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "keyremap"

    return Path.home() / ".config" / "keyremap"


def devices_file_path() -> Path:
    """Return the devices.json path.

    Priority:
    - KEYREMAP_DEVICES_PATH (explicit file override)
    - config_dir()/devices.json
    """

    p = os.environ.get("KEYREMAP_DEVICES_PATH")
    if p:
        return Path(p)
    return config_dir() / "devices.json"


def invalid_device_policy() -> str:
    """What to do with a device entry that fails validation: `raise` or `skip`."""

    v = (os.environ.get("KEYREMAP_INVALID_DEVICE_POLICY") or "").strip().lower()
    return v if v in INVALID_DEVICE_POLICIES else "raise"
