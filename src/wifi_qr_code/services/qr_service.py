"""QR rendering helpers for Wi-Fi credentials."""

from __future__ import annotations

import logging
from enum import Enum
from typing import BinaryIO

import qrcode
from PIL import Image
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage

from wifi_qr_code.constants import (
    DEFAULT_QR_BACKGROUND_COLOR,
    DEFAULT_QR_BORDER,
    DEFAULT_QR_BOX_SIZE,
    DEFAULT_QR_FILL_COLOR,
    DEFAULT_QR_SIZE,
    LIGHT_PIXEL,
)
from wifi_qr_code.services.wifi_payload import WifiCredentials

logger = logging.getLogger(__name__)


class ErrorCorrection(Enum):
    """QR error correction levels, valued as ``qrcode`` constants."""

    LOW = ERROR_CORRECT_L
    MEDIUM = ERROR_CORRECT_M
    QUARTILE = ERROR_CORRECT_Q
    HIGH = ERROR_CORRECT_H


_ERROR_CORRECTION_LABELS = {
    "L": ErrorCorrection.LOW,
    "LOW": ErrorCorrection.LOW,
    "M": ErrorCorrection.MEDIUM,
    "MEDIUM": ErrorCorrection.MEDIUM,
    "Q": ErrorCorrection.QUARTILE,
    "QUARTILE": ErrorCorrection.QUARTILE,
    "H": ErrorCorrection.HIGH,
    "HIGH": ErrorCorrection.HIGH,
}


class ImageSizeTooSmallError(ValueError):
    """Raised when the requested image cannot hold one pixel per QR module."""


def error_correction_from_label(label: str) -> ErrorCorrection:
    """Map a label such as ``"M"`` or ``"high"`` to an error correction level."""
    try:
        return _ERROR_CORRECTION_LABELS[label.upper().strip()]
    except KeyError as exc:
        raise ValueError(f"Unknown error correction level: {label!r}") from exc


def make_qr(
    payload: str,
    error_correction: ErrorCorrection = ErrorCorrection.MEDIUM,
    border: int = DEFAULT_QR_BORDER,
) -> qrcode.QRCode:
    """Build a fitted QR code for the payload.

    When the payload does not fit in the largest QR version at the requested
    error correction level, qrcode 7.x raises
    ``qrcode.exceptions.DataOverflowError`` and qrcode 8.x raises
    ``ValueError`` for the out of range version. Either propagates unchanged.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=error_correction.value,
        box_size=DEFAULT_QR_BOX_SIZE,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    logger.debug(
        "Built QR version %s with %s modules at %s",
        qr.version,
        qr.modules_count,
        error_correction.name,
    )
    return qr


def _module_scale(qr: qrcode.QRCode, image_size: int) -> int:
    """Return the largest integer pixel size per module that fits the image."""
    width = qr.modules_count + 2 * qr.border
    scale = image_size // width
    if scale < 1:
        raise ImageSizeTooSmallError(
            f"Image size {image_size} is too small for a QR code {width} modules wide."
        )
    return scale


def generate_qr_image(
    payload: str,
    error_correction: ErrorCorrection = ErrorCorrection.MEDIUM,
    image_size: int = DEFAULT_QR_SIZE,
) -> Image.Image:
    """Render a payload as a square grayscale image centered on a light canvas."""
    qr = make_qr(payload, error_correction)
    scale = _module_scale(qr, image_size)

    qr.box_size = 1
    image_factory = qr.make_image(
        image_factory=PilImage,
        fill_color=DEFAULT_QR_FILL_COLOR,
        back_color=DEFAULT_QR_BACKGROUND_COLOR,
    )
    code: Image.Image = image_factory.get_image().convert("L")
    width = code.width * scale
    code = code.resize((width, width), Image.Resampling.NEAREST)

    image = Image.new("L", (image_size, image_size), color=LIGHT_PIXEL)
    offset = (image_size - width) // 2
    image.paste(code, (offset, offset))
    logger.debug("Rendered %sx%s QR image at %s px per module", image_size, image_size, scale)
    return image


def encode_as_matrix(
    credentials: WifiCredentials,
    error_correction: ErrorCorrection = ErrorCorrection.MEDIUM,
) -> list[list[bool]]:
    """Encode credentials as QR modules without a quiet zone (True is dark)."""
    qr = make_qr(credentials.encode(), error_correction, border=0)
    return [[bool(module) for module in row] for row in qr.get_matrix()]


def encode_as_image(
    credentials: WifiCredentials,
    error_correction: ErrorCorrection = ErrorCorrection.MEDIUM,
    image_size: int = DEFAULT_QR_SIZE,
) -> bytes:
    """Encode credentials as raw 8-bit grayscale pixels, row major."""
    image = generate_qr_image(credentials.encode(), error_correction, image_size)
    return image.tobytes()


def encode_as_png(
    credentials: WifiCredentials,
    stream: BinaryIO,
    error_correction: ErrorCorrection = ErrorCorrection.MEDIUM,
    image_size: int = DEFAULT_QR_SIZE,
) -> None:
    """Write credentials to a binary stream as a PNG image."""
    image = generate_qr_image(credentials.encode(), error_correction, image_size)
    try:
        image.save(stream, format="PNG")
    except OSError:
        logger.debug("Failed to write PNG QR image", exc_info=True)
        raise


def encode_as_svg(
    credentials: WifiCredentials,
    stream: BinaryIO,
    error_correction: ErrorCorrection = ErrorCorrection.MEDIUM,
    image_size: int = DEFAULT_QR_SIZE,
) -> None:
    """Write credentials to a binary stream as an SVG document."""
    qr = make_qr(credentials.encode(), error_correction)
    _module_scale(qr, image_size)

    svg = qr.make_image(image_factory=SvgPathImage)
    # The path image carries a viewBox, so width and height only scale it.
    root = svg.get_image()
    root.set("width", str(image_size))
    root.set("height", str(image_size))
    try:
        svg.save(stream)
    except OSError:
        logger.debug("Failed to write SVG QR image", exc_info=True)
        raise
    logger.debug("Wrote %sx%s SVG QR image", image_size, image_size)
