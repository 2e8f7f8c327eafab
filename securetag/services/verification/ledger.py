"""
Verification Ledger
Append-only record of verification attempts plus the product's running count
"""

import logging
from typing import Optional

from bson import ObjectId

from securetag.models import (
    DeviceInfo,
    Location,
    Product,
    VerificationMethod,
    VerificationRecord,
    VerificationResult
)
from securetag.stores.base import Store
from securetag.utils.date_helpers import utc_now

logger = logging.getLogger(__name__)


class VerificationLedger:
    """Writes one record per verification; a failed write propagates"""

    def __init__(self, store: Store):
        self.store = store

    def record(self, product: Product, method: VerificationMethod, result: VerificationResult,
               confidence: Optional[int], location: Optional[Location] = None,
               device_info: Optional[DeviceInfo] = None,
               verifier_id: Optional[ObjectId] = None) -> VerificationRecord:
        """
        Append the record and bump the product's verification count in one unit of work.
        On return, product.verification_count and product.last_verified hold the stored values.

        Raises:
            StoreUnavailableError: If the store could not apply the write
        """
        record = VerificationRecord(
            product_id=product.product_id,
            product_ref=product._id,
            manufacturer_id=product.manufacturer_id,
            verifier_id=verifier_id,
            method=method,
            result=result,
            confidence=confidence,
            location=location or Location(),
            device_info=device_info or DeviceInfo(),
            timestamp=utc_now()
        )

        stored, count, last_verified = self.store.record_verification(record)

        product.verification_count = count
        product.last_verified = last_verified

        logger.info(
            f"Verification recorded: product={product.product_id} method={method.value} "
            f"result={result.value} count={count}"
        )
        return stored
