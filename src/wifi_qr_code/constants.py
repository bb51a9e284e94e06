"""Library-wide constants."""

from __future__ import annotations

# Payload Grammar
WIFI_SCHEME = "WIFI:"
AUTH_TAG_WEP = "WEP"
AUTH_TAG_WPA = "WPA"
AUTH_TAG_NOPASS = "nopass"

# Reserved characters in escape order; backslash must stay first.
RESERVED_CHARACTERS = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    (";", "\\;"),
    (",", "\\,"),
    (":", "\\:"),
)

# Security Label Normalization
SECURITY_ALIASES = {
    "WPA/WPA2/WPA3": "WPA",
    "WPA2": "WPA",
    "WPA3": "WPA",
    "OPEN": "NOPASS",
    "NONE": "NOPASS",
    "NO PASSWORD": "NOPASS",
}

# QR Code Generation Defaults
DEFAULT_QR_SIZE = 512
DEFAULT_QR_BOX_SIZE = 10
DEFAULT_QR_BORDER = 4
DEFAULT_QR_FILL_COLOR = "black"
DEFAULT_QR_BACKGROUND_COLOR = "white"

# Grayscale values used in raw image output
DARK_PIXEL = 0
LIGHT_PIXEL = 255
