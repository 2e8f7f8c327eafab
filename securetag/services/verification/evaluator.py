"""
Verification Evaluator
Decides the outcome of a scan or tap against stored product state
"""

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from securetag.core.exceptions import CounterfeitError
from securetag.models import Product, ProductStatus, VerificationMethod, VerificationResult
from securetag.services import tag_service
from securetag.stores.base import Store
from securetag.utils.date_helpers import ensure_aware, utc_now

logger = logging.getLogger(__name__)

CONFIDENCE = {
    VerificationResult.RECALLED: 95,
    VerificationResult.EXPIRED: 90,
    VerificationResult.TAMPERED: 85,
    VerificationResult.AUTHENTIC: 100
}

AUTHENTIC_MESSAGES = {
    VerificationMethod.QR: 'Product verified as authentic',
    VerificationMethod.NFC: 'Product verified as authentic via NFC'
}


@dataclass(frozen=True)
class Evaluation:
    result: VerificationResult
    confidence: Optional[int]
    message: str


def evaluate(product: Product, now: Optional[datetime] = None,
             method: VerificationMethod = VerificationMethod.QR) -> Evaluation:
    """
    Status table for a located, authenticated product; first match wins.
    Recalled outranks expired, which outranks a deactivated seal.
    """
    now = ensure_aware(now) or utc_now()
    expiry = ensure_aware(product.expiry_date)

    if product.status == ProductStatus.RECALLED:
        result, message = VerificationResult.RECALLED, 'Product has been recalled'
    elif product.status == ProductStatus.EXPIRED or (expiry is not None and expiry < now):
        result, message = VerificationResult.EXPIRED, 'Product has expired'
    elif not product.secure_tag.is_active:
        result, message = VerificationResult.TAMPERED, 'Product seal may have been tampered with'
    else:
        result, message = VerificationResult.AUTHENTIC, AUTHENTIC_MESSAGES[method]

    return Evaluation(result=result, confidence=CONFIDENCE[result], message=message)


def resolve_qr(store: Store, scan: str) -> Product:
    """
    Decode a QR payload, find its product and check the embedded key

    Raises:
        CounterfeitError: Malformed payload (400), unknown product (404)
            or key mismatch (400); checked in that order
    """
    product_id, provided_key = tag_service.decode(scan)

    product = store.get_product(product_id)
    if product is None:
        raise CounterfeitError('Product not found', status_code=404)

    stored_key = product.secure_tag.secret_key or ''
    if not hmac.compare_digest(stored_key.encode('utf-8'), provided_key.encode('utf-8')):
        logger.warning(f"QR key mismatch for product {product_id}")
        raise CounterfeitError('Invalid authentication key', status_code=400)

    return product


def resolve_nfc(store: Store, tag_id: str) -> Product:
    """
    Find the product carrying an NFC tag

    Raises:
        CounterfeitError: Unknown tag (404)
    """
    product = store.find_product_by_tag(tag_id) if tag_id else None
    if product is None:
        raise CounterfeitError('Invalid NFC tag', status_code=404)
    return product
