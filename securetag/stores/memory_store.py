"""
In-Memory Store
Thread-safe store for tests and local development without MongoDB
"""

import copy
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId

from securetag.core.exceptions import ConflictError, NotFoundError, StoreUnavailableError
from securetag.models import (
    AnalyticsBucket,
    ContactMessage,
    Product,
    User,
    VerificationRecord
)
from securetag.models.analytics import empty_metrics
from securetag.stores.base import Store, summarize_records
from securetag.utils.date_helpers import ensure_aware, utc_now

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _apply_increments(doc: Dict[str, Any], increments: Dict[str, int]):
    """Add to dotted counter paths, creating missing levels at zero"""
    for path, amount in increments.items():
        target = doc
        *parents, leaf = path.split('.')
        for part in parents:
            target = target.setdefault(part, {})
        target[leaf] = target.get(leaf, 0) + amount


class InMemoryStore(Store):
    """Every operation holds one lock, so each call is atomic"""

    def __init__(self):
        self._lock = threading.RLock()
        self.products: Dict[ObjectId, Dict[str, Any]] = {}
        self.verifications: List[Dict[str, Any]] = []
        self.analytics: Dict[Tuple[datetime, Optional[ObjectId]], Dict[str, Any]] = {}
        self.users: Dict[ObjectId, Dict[str, Any]] = {}
        self.contacts: List[Dict[str, Any]] = []
        self.available = True

    def _check_available(self):
        if not self.available:
            raise StoreUnavailableError("Database unavailable")

    # ===============================
    # PRODUCTS
    # ===============================
    def insert_product(self, product: Product) -> Product:
        with self._lock:
            self._check_available()
            nfc_id = product.secure_tag.nfc_id
            for doc in self.products.values():
                if doc['product_id'] == product.product_id:
                    raise ConflictError("Product identifier or tag already registered")
                if nfc_id and doc['secure_tag']['nfc_id'] == nfc_id:
                    raise ConflictError("Product identifier or tag already registered")

            product._id = product._id or ObjectId()
            self.products[product._id] = copy.deepcopy(product.to_dict())
            return product

    def get_product(self, product_id: str) -> Optional[Product]:
        with self._lock:
            self._check_available()
            for doc in self.products.values():
                if doc['product_id'] == product_id:
                    return Product.from_dict(copy.deepcopy(doc))
            return None

    def find_product_by_tag(self, nfc_id: str) -> Optional[Product]:
        with self._lock:
            self._check_available()
            for doc in self.products.values():
                if doc['secure_tag']['nfc_id'] == nfc_id:
                    return Product.from_dict(copy.deepcopy(doc))
            return None

    def list_products(self, manufacturer_id: Optional[ObjectId] = None, search: Optional[str] = None,
                      category: Optional[str] = None, status: Optional[str] = None,
                      page: int = 1, limit: int = 10) -> Tuple[List[Product], int]:
        needle = search.lower() if search else None

        def matches(doc):
            if manufacturer_id is not None and doc['manufacturer_id'] != manufacturer_id:
                return False
            if category and doc.get('category') != category:
                return False
            if status and doc.get('status') != status:
                return False
            if needle:
                haystacks = (doc.get('name'), doc.get('product_id'), doc.get('batch_number'))
                return any(needle in (value or '').lower() for value in haystacks)
            return True

        with self._lock:
            self._check_available()
            found = [doc for doc in self.products.values() if matches(doc)]
            found.sort(key=lambda doc: ensure_aware(doc.get('created_at')) or _EPOCH, reverse=True)
            start = (page - 1) * limit
            page_docs = found[start:start + limit]
            return [Product.from_dict(copy.deepcopy(doc)) for doc in page_docs], len(found)

    def product_refs_for_manufacturer(self, manufacturer_id: ObjectId) -> List[ObjectId]:
        with self._lock:
            self._check_available()
            return [_id for _id, doc in self.products.items() if doc['manufacturer_id'] == manufacturer_id]

    # ===============================
    # VERIFICATION LEDGER
    # ===============================
    def record_verification(self, record: VerificationRecord) -> Tuple[VerificationRecord, int, datetime]:
        with self._lock:
            self._check_available()
            product = self.products.get(record.product_ref)
            if product is None:
                raise NotFoundError("Product no longer exists")

            timestamp = record.timestamp or utc_now()
            stored = replace(record, _id=ObjectId(), timestamp=timestamp)
            self.verifications.append(copy.deepcopy(stored.to_dict()))

            product['verification_count'] = product.get('verification_count', 0) + 1
            product['last_verified'] = timestamp
            product['updated_at'] = timestamp
            return stored, product['verification_count'], timestamp

    def summarize_verifications(self, since: datetime,
                                product_refs: Optional[Sequence[ObjectId]] = None) -> Dict[str, Any]:
        refs = set(product_refs) if product_refs is not None else None
        with self._lock:
            self._check_available()
            records = [
                VerificationRecord.from_dict(copy.deepcopy(doc))
                for doc in self.verifications
                if ensure_aware(doc['timestamp']) >= since
                and (refs is None or doc.get('product') in refs)
            ]
        return summarize_records(records)

    # ===============================
    # ANALYTICS
    # ===============================
    def increment_analytics(self, day: datetime, manufacturer_id: Optional[ObjectId],
                            increments: Dict[str, int]) -> None:
        key = (day, manufacturer_id)
        with self._lock:
            self._check_available()
            bucket = self.analytics.get(key)
            if bucket is None:
                bucket = {
                    '_id': ObjectId(),
                    'date': day,
                    'manufacturer_id': manufacturer_id,
                    'metrics': empty_metrics(),
                    'created_at': utc_now()
                }
                self.analytics[key] = bucket
            _apply_increments(bucket, increments)

    def list_analytics(self, manufacturer_id: Optional[ObjectId], since: datetime) -> List[AnalyticsBucket]:
        with self._lock:
            self._check_available()
            docs = [
                copy.deepcopy(doc) for (day, owner), doc in self.analytics.items()
                if owner == manufacturer_id and day >= since
            ]
        docs.sort(key=lambda doc: doc['date'])
        return [AnalyticsBucket.from_dict(doc) for doc in docs]

    # ===============================
    # USERS
    # ===============================
    def insert_user(self, user: User) -> User:
        with self._lock:
            self._check_available()
            email = user.email.strip().lower()
            if any(doc['email'] == email for doc in self.users.values()):
                raise ConflictError("User already exists with this email")
            user._id = user._id or ObjectId()
            self.users[user._id] = copy.deepcopy(user.to_dict())
            return user

    def get_user(self, user_id: ObjectId) -> Optional[User]:
        with self._lock:
            self._check_available()
            doc = self.users.get(user_id)
            return User.from_dict(copy.deepcopy(doc)) if doc else None

    def find_user_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        return self._find_user(lambda doc: doc['email'] == email)

    def find_user_by_verification_token(self, token: str) -> Optional[User]:
        return self._find_user(lambda doc: token and doc.get('verification_token') == token)

    def _find_user(self, predicate) -> Optional[User]:
        with self._lock:
            self._check_available()
            for doc in self.users.values():
                if predicate(doc):
                    return User.from_dict(copy.deepcopy(doc))
            return None

    def update_user(self, user_id: ObjectId, fields: Dict[str, Any], unset: Iterable[str] = ()) -> None:
        with self._lock:
            self._check_available()
            doc = self.users.get(user_id)
            if doc is None:
                return
            doc.update(copy.deepcopy(fields))
            for name in unset:
                doc[name] = None

    # ===============================
    # CONTACTS
    # ===============================
    def insert_contact(self, contact: ContactMessage) -> ContactMessage:
        with self._lock:
            self._check_available()
            contact._id = ObjectId()
            self.contacts.append(copy.deepcopy(contact.to_dict()))
            return contact

    def ping(self) -> bool:
        return self.available
