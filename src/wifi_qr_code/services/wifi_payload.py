"""Wi-Fi credential model and QR payload encoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import assert_never

from wifi_qr_code.constants import (
    AUTH_TAG_NOPASS,
    AUTH_TAG_WEP,
    AUTH_TAG_WPA,
    RESERVED_CHARACTERS,
    SECURITY_ALIASES,
    WIFI_SCHEME,
)


@dataclass(frozen=True)
class WEP:
    """Legacy WEP authentication with a shared key."""

    password: str


@dataclass(frozen=True)
class WPA:
    """WPA family authentication (WPA, WPA2 and WPA3 encode the same way)."""

    password: str


@dataclass(frozen=True)
class NoPassword:
    """Open network without a password."""


Authentication = WEP | WPA | NoPassword


class Visibility(Enum):
    """Whether the network broadcasts its SSID."""

    VISIBLE = "visible"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class WifiCredentials:
    ssid: str
    authentication: Authentication = field(default_factory=NoPassword)
    visibility: Visibility = Visibility.VISIBLE

    def encode(self) -> str:
        """Encode these credentials as a Wi-Fi QR payload."""
        return encode(self)


def escape(value: str) -> str:
    """Escape payload delimiters for QR-encoded Wi-Fi strings."""
    for character, replacement in RESERVED_CHARACTERS:
        value = value.replace(character, replacement)
    return value


def _ssid_segment(ssid: str) -> str:
    return f"S:{escape(ssid)};"


def _authentication_segment(authentication: Authentication) -> str:
    match authentication:
        case WEP(password=password):
            return f"T:{AUTH_TAG_WEP};P:{escape(password)};"
        case WPA(password=password):
            return f"T:{AUTH_TAG_WPA};P:{escape(password)};"
        case NoPassword():
            return f"T:{AUTH_TAG_NOPASS};"
        case _:
            assert_never(authentication)


def _visibility_segment(visibility: Visibility) -> str:
    hidden = "true" if visibility is Visibility.HIDDEN else "false"
    return f"H:{hidden};"


def encode(credentials: WifiCredentials) -> str:
    """Build the Wi-Fi QR payload string for a set of credentials.

    The result always has the form
    ``WIFI:S:<ssid>;T:<auth>;P:<password>;H:<true|false>;;`` with the
    ``P:`` segment omitted for open networks.
    """
    return (
        WIFI_SCHEME
        + _ssid_segment(credentials.ssid)
        + _authentication_segment(credentials.authentication)
        + _visibility_segment(credentials.visibility)
        + ";"
    )


def normalize_security(value: str) -> str:
    """Normalize security labels into canonical forms."""
    key = value.upper().strip()
    return SECURITY_ALIASES.get(key, key)


def is_open_security(value: str) -> bool:
    """Return True when the security represents an open network."""
    return normalize_security(value) == "NOPASS"


def authentication_from_label(label: str, password: str = "") -> Authentication:
    """Map a security label such as ``"WPA2"`` or ``"None"`` to an authentication."""
    if is_open_security(label):
        return NoPassword()
    security = normalize_security(label)
    if security == AUTH_TAG_WPA:
        return WPA(password)
    if security == AUTH_TAG_WEP:
        return WEP(password)
    raise ValueError(f"Unsupported security type: {label!r}")
