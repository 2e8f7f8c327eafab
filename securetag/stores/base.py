"""
Store Interface
Persistence operations the services depend on, independent of the backend
"""

from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId

from securetag.models import (
    AnalyticsBucket,
    ContactMessage,
    Product,
    User,
    VerificationRecord
)

GEOGRAPHIC_LIMIT = 10


class Store(ABC):
    """Backend-neutral persistence for products, the verification ledger,
    analytics buckets, users and contact messages"""

    # -------------------------------
    # Products
    # -------------------------------
    @abstractmethod
    def insert_product(self, product: Product) -> Product:
        """Persist a new product; ConflictError if product_id or tag id is taken"""

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        """Look up by public product identifier"""

    @abstractmethod
    def find_product_by_tag(self, nfc_id: str) -> Optional[Product]:
        """Look up by stored NFC tag identifier"""

    @abstractmethod
    def list_products(self, manufacturer_id: Optional[ObjectId] = None, search: Optional[str] = None,
                      category: Optional[str] = None, status: Optional[str] = None,
                      page: int = 1, limit: int = 10) -> Tuple[List[Product], int]:
        """Newest first; returns (page of products, total matches)"""

    @abstractmethod
    def product_refs_for_manufacturer(self, manufacturer_id: ObjectId) -> List[ObjectId]:
        """Internal ids of every product a manufacturer owns"""

    # -------------------------------
    # Verification ledger
    # -------------------------------
    @abstractmethod
    def record_verification(self, record: VerificationRecord) -> Tuple[VerificationRecord, int, datetime]:
        """
        Append the record and add one to the product's verification count
        as a single unit of work

        Returns:
            (stored record, post-increment count, last_verified)

        Raises:
            StoreUnavailableError: If the write could not be applied
            NotFoundError: If the referenced product no longer exists
        """

    @abstractmethod
    def summarize_verifications(self, since: datetime,
                                product_refs: Optional[Sequence[ObjectId]] = None) -> Dict[str, Any]:
        """Totals, top countries and daily trends of ledger entries since a date"""

    # -------------------------------
    # Analytics buckets
    # -------------------------------
    @abstractmethod
    def increment_analytics(self, day: datetime, manufacturer_id: Optional[ObjectId],
                            increments: Dict[str, int]) -> None:
        """Upsert the (day, manufacturer) bucket and apply all increments in one update"""

    @abstractmethod
    def list_analytics(self, manufacturer_id: Optional[ObjectId], since: datetime) -> List[AnalyticsBucket]:
        """Buckets from a date onwards, oldest first"""

    # -------------------------------
    # Users
    # -------------------------------
    @abstractmethod
    def insert_user(self, user: User) -> User:
        """Persist a new user; ConflictError if the email is registered"""

    @abstractmethod
    def get_user(self, user_id: ObjectId) -> Optional[User]:
        pass

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_user_by_verification_token(self, token: str) -> Optional[User]:
        pass

    @abstractmethod
    def update_user(self, user_id: ObjectId, fields: Dict[str, Any], unset: Iterable[str] = ()) -> None:
        pass

    # -------------------------------
    # Contact messages
    # -------------------------------
    @abstractmethod
    def insert_contact(self, contact: ContactMessage) -> ContactMessage:
        pass

    # -------------------------------
    # Lifecycle
    # -------------------------------
    @abstractmethod
    def ping(self) -> bool:
        """True when the backend is reachable"""

    def ensure_indexes(self):
        """Create backend indexes (no-op where not applicable)"""

    def close(self):
        """Release backend resources"""


def empty_summary() -> Dict[str, Any]:
    return {
        'stats': {
            'total_verifications': 0,
            'authentic': 0,
            'counterfeit': 0,
            'tampered': 0,
            'expired': 0,
            'recalled': 0,
            'qr': 0,
            'nfc': 0
        },
        'geographic': [],
        'trends': []
    }


def summarize_records(records: Iterable[VerificationRecord]) -> Dict[str, Any]:
    """Summary of already-filtered ledger entries, same shape as the Mongo pipelines"""
    summary = empty_summary()
    stats = summary['stats']
    countries = Counter()
    days: Dict[str, Dict[str, int]] = {}

    for record in records:
        stats['total_verifications'] += 1
        stats[record.result.value] += 1
        stats[record.method.value] += 1

        if record.location.country:
            countries[record.location.country] += 1

        timestamp = record.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        day = timestamp.astimezone(timezone.utc).strftime('%Y-%m-%d')
        bucket = days.setdefault(day, {'verifications': 0, 'authentic': 0})
        bucket['verifications'] += 1
        if record.result.value == 'authentic':
            bucket['authentic'] += 1

    ranked = sorted(countries.items(), key=lambda item: (-item[1], item[0]))
    summary['geographic'] = [
        {'country': country, 'count': count}
        for country, count in ranked[:GEOGRAPHIC_LIMIT]
    ]
    summary['trends'] = [
        {'date': day, 'verifications': values['verifications'], 'authentic': values['authentic']}
        for day, values in sorted(days.items())
    ]
    return summary
