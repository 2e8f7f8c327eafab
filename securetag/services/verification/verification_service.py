"""
Verification Service
Runs a scan or tap through evaluation, the ledger and the analytics counters
"""

import logging
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.core.exceptions import CounterfeitError, StoreUnavailableError
from securetag.models import DeviceInfo, Location, Product, VerificationMethod
from securetag.services.analytics_service import AnalyticsService
from securetag.services.verification import evaluator
from securetag.services.verification.ledger import VerificationLedger
from securetag.stores.base import Store
from securetag.utils.date_helpers import isoformat_or_none

logger = logging.getLogger(__name__)


class VerificationService:

    def __init__(self, store: Store, ledger: VerificationLedger, analytics: AnalyticsService):
        self.store = store
        self.ledger = ledger
        self.analytics = analytics

    def verify_qr(self, qr_data: str, location: Optional[Location] = None,
                  device_info: Optional[DeviceInfo] = None,
                  verifier_id: Optional[ObjectId] = None) -> Dict[str, Any]:
        """
        Verify a scanned QR payload

        Raises:
            CounterfeitError: Malformed payload, unknown product or wrong key
            StoreUnavailableError: If the verification could not be recorded
        """
        try:
            product = evaluator.resolve_qr(self.store, qr_data)
        except CounterfeitError as e:
            logger.info(f"QR verification rejected: {e.message}")
            raise

        return self._complete(product, VerificationMethod.QR, location, device_info, verifier_id)

    def verify_nfc(self, nfc_id: str, location: Optional[Location] = None,
                   device_info: Optional[DeviceInfo] = None,
                   verifier_id: Optional[ObjectId] = None) -> Dict[str, Any]:
        """
        Verify a tapped NFC tag

        Raises:
            CounterfeitError: Unknown tag
            StoreUnavailableError: If the verification could not be recorded
        """
        try:
            product = evaluator.resolve_nfc(self.store, nfc_id)
        except CounterfeitError as e:
            logger.info(f"NFC verification rejected: {e.message}")
            raise

        return self._complete(product, VerificationMethod.NFC, location, device_info, verifier_id)

    def _complete(self, product: Product, method: VerificationMethod, location: Optional[Location],
                  device_info: Optional[DeviceInfo], verifier_id: Optional[ObjectId]) -> Dict[str, Any]:
        evaluation = evaluator.evaluate(product, method=method)

        try:
            self.ledger.record(
                product,
                method,
                evaluation.result,
                evaluation.confidence,
                location=location,
                device_info=device_info,
                verifier_id=verifier_id
            )
        except StoreUnavailableError:
            logger.error(f"Verification of {product.product_id} could not be recorded")
            raise

        self.analytics.bump(product.manufacturer_id, method, evaluation.result)

        return {
            'result': evaluation.result.value,
            'message': evaluation.message,
            'confidence': evaluation.confidence,
            'product': self._product_summary(product)
        }

    def _product_summary(self, product: Product) -> Dict[str, Any]:
        manufacturer = None
        if product.manufacturer_id is not None:
            manufacturer = self.store.get_user(product.manufacturer_id)

        return {
            'id': product.product_id,
            'name': product.name,
            'manufacturer': manufacturer.display_name if manufacturer else 'Unknown manufacturer',
            'manufacturingDate': isoformat_or_none(product.manufacturing_date),
            'origin': product.origin.to_dict(),
            'verificationCount': product.verification_count
        }
