# tests/unit/test_email_service.py
import logging
import smtplib

from securetag.config import Settings
from securetag.services.email_service import (
    CONTACT_CONFIRMATION,
    CONTACT_NOTIFICATION,
    VERIFY_EMAIL,
    EmailService
)

CONTACT_FIELDS = {
    'first_name': 'Amina',
    'last_name': 'Bello',
    'email': 'amina@example.com',
    'company': 'Bello Pharma',
    'message': 'Please call me back about NFC tags.',
    'submitted_at': '2025-01-01T10:00:00+00:00'
}


def test_console_mode_logs_verification_link(caplog):
    service = EmailService(Settings(email_mode='console', frontend_url='https://app.securetag.test/'))

    with caplog.at_level(logging.INFO, logger='securetag.services.email_service'):
        assert service.send(VERIFY_EMAIL, 'user@example.com', {'token': 'abc123'}) is True

    assert 'https://app.securetag.test/verify-email?token=abc123' in caplog.text


def test_contact_templates_render(caplog):
    service = EmailService(Settings(email_mode='console'))

    with caplog.at_level(logging.INFO, logger='securetag.services.email_service'):
        assert service.send(CONTACT_NOTIFICATION, 'inbox@example.com', CONTACT_FIELDS) is True
        assert service.send(CONTACT_CONFIRMATION, 'amina@example.com', CONTACT_FIELDS) is True

    assert 'Bello Pharma' in caplog.text


def test_disabled_mode_drops_silently():
    service = EmailService(Settings(email_mode='disabled'))
    assert service.send(VERIFY_EMAIL, 'user@example.com', {'token': 't'}) is True


def test_unknown_template_is_reported_not_raised():
    service = EmailService(Settings(email_mode='console'))
    assert service.send('newsletter', 'user@example.com', {}) is False


def test_missing_template_field_is_reported_not_raised():
    service = EmailService(Settings(email_mode='console'))
    assert service.send(VERIFY_EMAIL, 'user@example.com', {}) is False


def test_smtp_failure_is_reported_not_raised(monkeypatch):
    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, 'unavailable')

    monkeypatch.setattr(smtplib, 'SMTP', refuse)
    service = EmailService(Settings(email_mode='smtp', smtp_host='smtp.invalid'))

    assert service.send(VERIFY_EMAIL, 'user@example.com', {'token': 't'}) is False
