"""
Render payload strings as QR images (PNG).
"""

import base64
import io
import logging
from pathlib import Path

import qrcode

logger = logging.getLogger(__name__)


def build_qr_image(payload: str, box_size: int = 8, border: int = 2):
    qr = qrcode.QRCode(box_size=box_size, border=border)
    qr.add_data(payload)
    qr.make(fit=True)
    logger.debug("QR version %s for %d-char payload", qr.version, len(payload))
    return qr.make_image(fill_color="black", back_color="white")

def build_qr_png(payload: str, box_size: int = 8, border: int = 2) -> bytes:
    img = build_qr_image(payload, box_size=box_size, border=border)
    bio = io.BytesIO()
    img.save(bio, format="PNG")
    return bio.getvalue()

def build_qr_png_base64(payload: str, box_size: int = 8, border: int = 2) -> str:
    return base64.b64encode(build_qr_png(payload, box_size=box_size, border=border)).decode("utf-8")

def save_qr_png(payload: str, path, box_size: int = 8, border: int = 2) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(build_qr_png(payload, box_size=box_size, border=border))
    logger.info("wrote QR image to %s", output_path)
    return output_path
