"""Default values and well-known device ids for per-device configuration."""

from __future__ import annotations

DEFAULT_DELAY_MILLISECONDS_BEFORE_OPEN_DEVICE = 3000

FN_FUNCTION_KEY_COUNT = 12

# Apple vendor ids: USB and Bluetooth.
APPLE_VENDOR_IDS = (0x05AC, 0x004C)

# Touch Bar on MacBook Pro 2016.
TOUCH_BAR_VENDOR_ID = 0x05AC
TOUCH_BAR_PRODUCT_ID = 0x8600

# YubiKey tokens enumerate as keyboards; every product is ignored by default.
YUBICO_VENDOR_ID = 0x1050

DEFAULTS: dict = {
    "ignore": False,
    "manipulate_caps_lock_led": False,
    "delay_milliseconds_before_open_device": DEFAULT_DELAY_MILLISECONDS_BEFORE_OPEN_DEVICE,
    "disable_built_in_keyboard_if_exists": False,
}
