"""
Tag Identity Service
Per-product secret credentials and the scannable code that carries them
"""

import base64
import io
import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import Tuple

import qrcode

from securetag.core.exceptions import MalformedCodeError

logger = logging.getLogger(__name__)

QR_PREFIX = 'ST'
QR_DELIMITER = '-'
PRODUCT_ID_PREFIX = 'ST'
TOKEN_BYTES = 16  # 128 bits

_ID_ALPHABET = string.ascii_uppercase + string.digits


@dataclass(frozen=True)
class TagIdentity:
    secret_key: str
    tag_id: str
    tamper_seal: str


def generate_secure_id() -> str:
    """Random 128-bit token, hex encoded"""
    return secrets.token_hex(TOKEN_BYTES)


def generate() -> TagIdentity:
    """Draw a fresh secret key, NFC tag id and tamper seal"""
    return TagIdentity(
        secret_key=generate_secure_id(),
        tag_id=generate_secure_id(),
        tamper_seal=generate_secure_id()
    )


def generate_product_id() -> str:
    """ST + epoch millis + 5 random uppercase alphanumerics; never contains the delimiter"""
    suffix = ''.join(secrets.choice(_ID_ALPHABET) for _ in range(5))
    return f"{PRODUCT_ID_PREFIX}{int(time.time() * 1000)}{suffix}"


def encode(product_id: str, secret_key: str) -> str:
    """Payload embedded in the product's QR code"""
    return QR_DELIMITER.join((QR_PREFIX, product_id, secret_key))


def decode(code: str) -> Tuple[str, str]:
    """
    Split a scanned payload into (product_id, secret_key)

    Raises:
        MalformedCodeError: Unless the payload is exactly PREFIX-productId-secretKey
    """
    if not isinstance(code, str):
        raise MalformedCodeError("Invalid QR code format")

    parts = code.strip().split(QR_DELIMITER)
    if len(parts) != 3 or parts[0] != QR_PREFIX or not parts[1] or not parts[2]:
        raise MalformedCodeError("Invalid QR code format")

    return parts[1], parts[2]


def render_qr_code(code: str) -> str:
    """PNG data URL of the payload, ready for an <img src>"""
    image = qrcode.make(code)
    buffer = io.BytesIO()
    image.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode('ascii')
    return f"data:image/png;base64,{encoded}"
