"""
Contact Service
Stores contact form submissions and sends the two notification emails
"""

import logging
from typing import Any, Dict

from securetag.models import ContactMessage
from securetag.services.email_service import (
    CONTACT_CONFIRMATION,
    CONTACT_NOTIFICATION,
    NotificationSink
)
from securetag.stores.base import Store
from securetag.utils.date_helpers import utc_now

logger = logging.getLogger(__name__)


class ContactService:
    """Stores contact form messages and notifies both parties"""

    def __init__(self, store: Store, notifier: NotificationSink, inbox: str):
        self.store = store
        self.notifier = notifier
        self.inbox = inbox

    def submit(self, cleaned: Dict[str, Any]) -> ContactMessage:
        contact = ContactMessage(
            first_name=cleaned['first_name'],
            last_name=cleaned['last_name'],
            email=cleaned['email'],
            company=cleaned['company'],
            message=cleaned['message'],
            created_at=utc_now()
        )
        contact = self.store.insert_contact(contact)
        logger.info(f"Contact form submission from {contact.full_name} ({contact.email})")

        fields = {
            'first_name': contact.first_name,
            'last_name': contact.last_name,
            'email': contact.email,
            'company': contact.company,
            'message': contact.message,
            'submitted_at': contact.created_at.isoformat()
        }
        if not self.notifier.send(CONTACT_NOTIFICATION, self.inbox, fields):
            logger.warning(f"Contact notification for {contact._id} was not delivered")
        if not self.notifier.send(CONTACT_CONFIRMATION, contact.email, fields):
            logger.warning(f"Contact confirmation to {contact.email} was not delivered")

        return contact
