# -*- coding: utf-8 -*-
"""
QR helpers for the vCard payload.
- build_qr_png(text, settings) -> Optional[bytes]   (qrcode + Pillow)
- decode_qr_from_ndarray(img) -> Optional[str]     (OpenCV)
- decode_qr_from_bytes(b) -> Optional[str]
The decoder is used to check rendered images, not to import contacts.
"""
from __future__ import annotations
import io
import logging
from typing import List, Optional

import cv2  # type: ignore
import numpy as np  # type: ignore
import qrcode
import qrcode.constants
from qrcode.exceptions import DataOverflowError
from PIL import Image

from vcardgen.config import QRSettings

logger = logging.getLogger(__name__)

_EC_CONSTANTS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

# -----------------------------
# Rendering
# -----------------------------

def build_qr_png(text: str, settings: Optional[QRSettings] = None) -> Optional[bytes]:
    """Render text as a square PNG QR code. Returns None if it does not fit in a QR symbol."""
    settings = settings or QRSettings()
    qr = qrcode.QRCode(
        version=None,  # smallest version that fits
        error_correction=_EC_CONSTANTS[settings.error_correction],
        box_size=10,
        border=settings.border,
    )
    qr.add_data(text)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError):  # qrcode 8.x raises ValueError for version 41
        logger.warning("QR payload too large: %d chars at level %s", len(text), settings.error_correction)
        return None

    img = qr.make_image(fill_color=settings.dark, back_color=settings.light).convert("RGB")
    if img.size != (settings.width, settings.width):
        img = img.resize((settings.width, settings.width), Image.NEAREST)
    out = io.BytesIO()
    img.save(out, format="PNG")
    logger.debug("QR rendered: version=%s size=%s", qr.version, img.size)
    return out.getvalue()

# -----------------------------
# Decoding
# -----------------------------

def _variants(gray: np.ndarray) -> List[np.ndarray]:
    """Gray, Otsu binarized, then 2x upscale (small renders)."""
    _, otsu = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    h, w = gray.shape[:2]
    up = cv2.resize(gray, (w * 2, h * 2), interpolation=cv2.INTER_NEAREST)
    return [gray, otsu, up]


def decode_qr_from_ndarray(img) -> Optional[str]:
    """Decode the first QR code in a BGR or gray ndarray."""
    arr = np.array(img)
    if arr.dtype != np.uint8:
        arr = arr.astype(np.uint8, copy=False)
    if arr.ndim == 3:
        gray = cv2.cvtColor(arr, cv2.COLOR_BGR2GRAY)
    else:
        gray = arr

    det = cv2.QRCodeDetector()
    for v in _variants(gray):
        try:
            data, _, _ = det.detectAndDecode(v)
        except cv2.error as e:
            logger.debug("OpenCV decode error: %r", e)
            continue
        if data:
            return data
    return None


def decode_qr_from_bytes(b: bytes) -> Optional[str]:
    """Load image bytes (PNG/JPG) and decode."""
    file_bytes = np.asarray(bytearray(b), dtype=np.uint8)
    if file_bytes.size == 0:
        return None
    img = cv2.imdecode(file_bytes, cv2.IMREAD_COLOR)
    if img is None:
        return None
    return decode_qr_from_ndarray(img)
