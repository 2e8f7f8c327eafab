"""
Analytics Service
Best-effort daily verification counters and the manufacturer dashboard
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from bson import ObjectId

from securetag.models import AnalyticsBucket, UserRole, VerificationMethod, VerificationResult
from securetag.models.analytics import increments_for
from securetag.stores.base import Store
from securetag.utils.date_helpers import DEFAULT_PERIOD, PERIOD_DAYS, get_period_range, start_of_day

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Per-manufacturer daily counters and the dashboard report"""

    def __init__(self, store: Store):
        self.store = store

    def bump(self, manufacturer_id: Optional[ObjectId], method: VerificationMethod,
             result: VerificationResult, day: Optional[datetime] = None) -> bool:
        """
        Add one verification to the (day, manufacturer) bucket.
        Best effort: failures are logged and never reach the caller.
        """
        day = start_of_day(day)
        try:
            self.store.increment_analytics(day, manufacturer_id, increments_for(method, result))
            return True
        except Exception as e:
            logger.error(
                f"Analytics update failed for manufacturer {manufacturer_id} on {day.date()}: {e}",
                exc_info=True
            )
            return False

    def daily_buckets(self, manufacturer_id: Optional[ObjectId], days: int = 30) -> List[AnalyticsBucket]:
        """Buckets for the last `days` days including today, oldest first"""
        since = start_of_day() - timedelta(days=max(days, 1) - 1)
        return self.store.list_analytics(manufacturer_id, since)

    def dashboard(self, user_id: ObjectId, role: UserRole, period: str = DEFAULT_PERIOD) -> Dict[str, Any]:
        """Verification report over the ledger; non-admins see only their own products"""
        if period not in PERIOD_DAYS:
            period = DEFAULT_PERIOD
        start_date, _ = get_period_range(period)

        product_refs = None
        if role != UserRole.ADMIN:
            product_refs = self.store.product_refs_for_manufacturer(user_id)

        summary = self.store.summarize_verifications(start_date, product_refs)
        stats = summary['stats']
        total = stats['total_verifications']

        authenticity_rate = round(stats['authentic'] / total * 100, 1) if total > 0 else 0

        return {
            'period': period,
            'summary': {
                'totalVerifications': total,
                'authenticityRate': authenticity_rate,
                'counterfeitDetections': stats['counterfeit'],
                'tamperedDetections': stats['tampered'],
                'expiredDetections': stats['expired'],
                'recalledDetections': stats['recalled']
            },
            'methods': {
                'qr': stats['qr'],
                'nfc': stats['nfc']
            },
            'geographic': summary['geographic'],
            'trends': summary['trends']
        }
