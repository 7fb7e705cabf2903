from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, UTC
from io import BytesIO
from typing import Optional

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q


DEFAULT_WIDTH = 320
DEFAULT_MARGIN = 2
DEFAULT_ERROR_CORRECTION = "M"

_ERROR_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class QrExportError(RuntimeError):
    """Raised when the phrase cannot be encoded as a QR image."""


@dataclass(frozen=True)
class QrImage:
    png: bytes
    filename: str
    width: int


def export_filename(now: Optional[datetime] = None) -> str:
    dt = now or datetime.now(UTC)
    return f"seed-phrase-qr-{dt.strftime('%Y%m%d-%H%M%S')}.png"


def encode_qr(
    text: str,
    *,
    width: int = DEFAULT_WIDTH,
    margin: int = DEFAULT_MARGIN,
    error_correction: str = DEFAULT_ERROR_CORRECTION,
) -> QrImage:
    """
    Render `text` as a square PNG QR code of `width` pixels.

    - `error_correction` is one of L/M/Q/H.
    - Any failure in the encoder is raised as QrExportError; no partial
      image is returned.
    """
    if not text:
        raise QrExportError("Nothing to encode")
    level = _ERROR_LEVELS.get(error_correction.upper())
    if level is None:
        raise QrExportError(f"Unknown error correction level: {error_correction}")

    try:
        qr = qrcode.QRCode(version=None, error_correction=level, box_size=10, border=margin)
        qr.add_data(text)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white").get_image()
        img = img.convert("RGB").resize((width, width), Image.Resampling.NEAREST)
        buf = BytesIO()
        img.save(buf, format="PNG")
    except Exception as exc:
        raise QrExportError(f"Failed to generate QR code: {exc}") from exc

    return QrImage(png=buf.getvalue(), filename=export_filename(), width=width)


__all__ = ["QrExportError", "QrImage", "encode_qr", "export_filename"]
