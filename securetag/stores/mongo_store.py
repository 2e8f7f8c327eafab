"""
MongoDB Store
pymongo implementation of the store interface
"""

import functools
import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from securetag.config.database import close_mongo_client
from securetag.core.exceptions import ConflictError, NotFoundError, StoreUnavailableError
from securetag.models import (
    AnalyticsBucket,
    ContactMessage,
    Product,
    User,
    VerificationRecord
)
from securetag.stores.base import GEOGRAPHIC_LIMIT, Store, empty_summary
from securetag.utils.date_helpers import utc_now

logger = logging.getLogger(__name__)


def _store_errors(f):
    """Surface driver failures as StoreUnavailableError"""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Store operation {f.__name__} failed: {e}")
            raise StoreUnavailableError("Database unavailable") from e
    return wrapper


class MongoStore(Store):
    """Store backed by a MongoDB database"""

    def __init__(self, client, database_name: str, use_transactions: bool = False):
        self.client = client
        self.db = client[database_name]
        self.use_transactions = use_transactions

    # ===============================
    # PRODUCTS
    # ===============================
    @_store_errors
    def insert_product(self, product: Product) -> Product:
        doc = product.to_dict()
        doc.pop('_id', None)
        try:
            result = self.db.products.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("Product identifier or tag already registered")
        product._id = result.inserted_id
        return product

    @_store_errors
    def get_product(self, product_id: str) -> Optional[Product]:
        doc = self.db.products.find_one({'product_id': product_id})
        return Product.from_dict(doc) if doc else None

    @_store_errors
    def find_product_by_tag(self, nfc_id: str) -> Optional[Product]:
        doc = self.db.products.find_one({'secure_tag.nfc_id': nfc_id})
        return Product.from_dict(doc) if doc else None

    @_store_errors
    def list_products(self, manufacturer_id: Optional[ObjectId] = None, search: Optional[str] = None,
                      category: Optional[str] = None, status: Optional[str] = None,
                      page: int = 1, limit: int = 10) -> Tuple[List[Product], int]:
        query: Dict[str, Any] = {}

        if manufacturer_id is not None:
            query['manufacturer_id'] = manufacturer_id

        if search:
            pattern = {'$regex': re.escape(search), '$options': 'i'}
            query['$or'] = [
                {'name': pattern},
                {'product_id': pattern},
                {'batch_number': pattern}
            ]

        if category:
            query['category'] = category

        if status:
            query['status'] = status

        cursor = (
            self.db.products.find(query)
            .sort('created_at', DESCENDING)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        products = [Product.from_dict(doc) for doc in cursor]
        total = self.db.products.count_documents(query)
        return products, total

    @_store_errors
    def product_refs_for_manufacturer(self, manufacturer_id: ObjectId) -> List[ObjectId]:
        cursor = self.db.products.find({'manufacturer_id': manufacturer_id}, {'_id': 1})
        return [doc['_id'] for doc in cursor]

    # ===============================
    # VERIFICATION LEDGER
    # ===============================
    @_store_errors
    def record_verification(self, record: VerificationRecord) -> Tuple[VerificationRecord, int, datetime]:
        if self.use_transactions:
            with self.client.start_session() as session:
                return session.with_transaction(
                    lambda s: self._append_and_count(record, session=s)
                )
        return self._append_and_count(record, compensate=True)

    def _append_and_count(self, record: VerificationRecord, session=None, compensate: bool = False):
        doc = record.to_dict()
        doc.pop('_id', None)
        timestamp = record.timestamp or utc_now()
        doc['timestamp'] = timestamp

        inserted_id = self.db.verifications.insert_one(doc, session=session).inserted_id

        try:
            updated = self.db.products.find_one_and_update(
                {'_id': record.product_ref},
                {
                    '$inc': {'verification_count': 1},
                    '$set': {'last_verified': timestamp, 'updated_at': timestamp}
                },
                projection={'verification_count': 1, 'last_verified': 1},
                return_document=ReturnDocument.AFTER,
                session=session
            )
            if updated is None:
                raise NotFoundError("Product no longer exists")
        except Exception:
            if compensate:
                self._remove_verification(inserted_id)
            raise

        stored = replace(record, _id=inserted_id, timestamp=timestamp)
        return stored, updated['verification_count'], updated['last_verified']

    def _remove_verification(self, inserted_id: ObjectId):
        """Compensating delete for a ledger entry whose counter update failed"""
        try:
            self.db.verifications.delete_one({'_id': inserted_id})
            logger.warning(f"Rolled back verification {inserted_id} after counter update failure")
        except PyMongoError as e:
            logger.critical(f"Could not roll back verification {inserted_id}: {e}")

    @_store_errors
    def summarize_verifications(self, since: datetime,
                                product_refs: Optional[Sequence[ObjectId]] = None) -> Dict[str, Any]:
        match: Dict[str, Any] = {'timestamp': {'$gte': since}}
        if product_refs is not None:
            match['product'] = {'$in': list(product_refs)}

        def count_where(field: str, value: str) -> Dict[str, Any]:
            return {'$sum': {'$cond': [{'$eq': [f'${field}', value]}, 1, 0]}}

        stats_pipeline = [
            {'$match': match},
            {'$group': {
                '_id': None,
                'total_verifications': {'$sum': 1},
                'authentic': count_where('result', 'authentic'),
                'counterfeit': count_where('result', 'counterfeit'),
                'tampered': count_where('result', 'tampered'),
                'expired': count_where('result', 'expired'),
                'recalled': count_where('result', 'recalled'),
                'qr': count_where('method', 'qr'),
                'nfc': count_where('method', 'nfc')
            }}
        ]

        geographic_pipeline = [
            {'$match': {**match, 'location.country': {'$nin': [None, '']}}},
            {'$group': {'_id': '$location.country', 'count': {'$sum': 1}}},
            {'$sort': {'count': -1, '_id': 1}},
            {'$limit': GEOGRAPHIC_LIMIT}
        ]

        trends_pipeline = [
            {'$match': match},
            {'$group': {
                '_id': {'$dateToString': {'format': '%Y-%m-%d', 'date': '$timestamp'}},
                'verifications': {'$sum': 1},
                'authentic': count_where('result', 'authentic')
            }},
            {'$sort': {'_id': 1}}
        ]

        summary = empty_summary()

        stats = list(self.db.verifications.aggregate(stats_pipeline))
        if stats:
            stats[0].pop('_id', None)
            summary['stats'].update(stats[0])

        summary['geographic'] = [
            {'country': row['_id'], 'count': row['count']}
            for row in self.db.verifications.aggregate(geographic_pipeline)
        ]
        summary['trends'] = [
            {'date': row['_id'], 'verifications': row['verifications'], 'authentic': row['authentic']}
            for row in self.db.verifications.aggregate(trends_pipeline)
        ]
        return summary

    # ===============================
    # ANALYTICS
    # ===============================
    @_store_errors
    def increment_analytics(self, day: datetime, manufacturer_id: Optional[ObjectId],
                            increments: Dict[str, int]) -> None:
        key = {'date': day, 'manufacturer_id': manufacturer_id}
        update = {
            '$inc': increments,
            '$setOnInsert': {'created_at': utc_now()}
        }
        try:
            self.db.analytics.update_one(key, update, upsert=True)
        except DuplicateKeyError:
            # Lost a concurrent first insert; the bucket exists now
            self.db.analytics.update_one(key, update, upsert=True)

    @_store_errors
    def list_analytics(self, manufacturer_id: Optional[ObjectId], since: datetime) -> List[AnalyticsBucket]:
        cursor = self.db.analytics.find({
            'manufacturer_id': manufacturer_id,
            'date': {'$gte': since}
        }).sort('date', ASCENDING)
        return [AnalyticsBucket.from_dict(doc) for doc in cursor]

    # ===============================
    # USERS
    # ===============================
    @_store_errors
    def insert_user(self, user: User) -> User:
        doc = user.to_dict()
        doc.pop('_id', None)
        try:
            result = self.db.users.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("User already exists with this email")
        user._id = result.inserted_id
        return user

    @_store_errors
    def get_user(self, user_id: ObjectId) -> Optional[User]:
        doc = self.db.users.find_one({'_id': user_id})
        return User.from_dict(doc) if doc else None

    @_store_errors
    def find_user_by_email(self, email: str) -> Optional[User]:
        doc = self.db.users.find_one({'email': email.strip().lower()})
        return User.from_dict(doc) if doc else None

    @_store_errors
    def find_user_by_verification_token(self, token: str) -> Optional[User]:
        doc = self.db.users.find_one({'verification_token': token})
        return User.from_dict(doc) if doc else None

    @_store_errors
    def update_user(self, user_id: ObjectId, fields: Dict[str, Any], unset: Iterable[str] = ()) -> None:
        update: Dict[str, Any] = {}
        if fields:
            update['$set'] = fields
        unset = list(unset)
        if unset:
            update['$unset'] = {name: "" for name in unset}
        if update:
            self.db.users.update_one({'_id': user_id}, update)

    # ===============================
    # CONTACTS
    # ===============================
    @_store_errors
    def insert_contact(self, contact: ContactMessage) -> ContactMessage:
        doc = contact.to_dict()
        doc.pop('_id', None)
        contact._id = self.db.contacts.insert_one(doc).inserted_id
        return contact

    # ===============================
    # LIFECYCLE
    # ===============================
    def ping(self) -> bool:
        try:
            self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.error(f"Database ping failed: {e}")
            return False

    @_store_errors
    def ensure_indexes(self):
        """Create collection indexes; safe to run repeatedly"""
        logger.info("Creating indexes for 'users' collection...")
        self.db.users.create_index('email', unique=True)
        self.db.users.create_index('verification_token', sparse=True)

        logger.info("Creating indexes for 'products' collection...")
        self.db.products.create_index('product_id', unique=True)
        self.db.products.create_index('manufacturer_id')
        self.db.products.create_index('secure_tag.nfc_id', unique=True)
        self.db.products.create_index([('created_at', DESCENDING)])

        logger.info("Creating indexes for 'verifications' collection...")
        self.db.verifications.create_index('product_id')
        self.db.verifications.create_index([('timestamp', DESCENDING)])
        self.db.verifications.create_index([('product', ASCENDING), ('timestamp', DESCENDING)])

        logger.info("Creating indexes for 'analytics' collection...")
        self.db.analytics.create_index([('date', ASCENDING), ('manufacturer_id', ASCENDING)], unique=True)

        logger.info("Creating indexes for 'contacts' collection...")
        self.db.contacts.create_index([('created_at', DESCENDING)])

        logger.info("Database indexes initialized successfully")

    def close(self):
        close_mongo_client(self.client)
