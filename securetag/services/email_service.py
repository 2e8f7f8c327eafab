"""
Email Service
Notification sink with console, SMTP and disabled delivery modes
"""

import logging
import smtplib
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

VERIFY_EMAIL = 'verify_email'
CONTACT_NOTIFICATION = 'contact_notification'
CONTACT_CONFIRMATION = 'contact_confirmation'


class NotificationSink(ABC):
    """Outbound notifications; a failed send never fails the caller"""

    @abstractmethod
    def send(self, template_id: str, recipient: str, fields: Dict[str, Any]) -> bool:
        """Render and deliver a template; False when delivery failed"""


class EmailService(NotificationSink):
    """
    Email delivery for account verification and the contact form
    Modes: console (log only), smtp, disabled
    """

    def __init__(self, settings):
        self.email_mode = settings.email_mode
        self.from_email = settings.from_email
        self.frontend_url = settings.frontend_url.rstrip('/')
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.email_user
        self.smtp_password = settings.email_pass

        self.templates = {
            VERIFY_EMAIL: self._verify_email_template,
            CONTACT_NOTIFICATION: self._contact_notification_template,
            CONTACT_CONFIRMATION: self._contact_confirmation_template
        }

    def send(self, template_id: str, recipient: str, fields: Dict[str, Any]) -> bool:
        try:
            render = self.templates[template_id]
        except KeyError:
            logger.error(f"Unknown email template: {template_id}")
            return False

        try:
            subject, html_content, text_content = render(fields)
            return self._send_email(recipient, subject, html_content, text_content, template_id)
        except Exception as e:
            logger.error(f"Send email error ({template_id} to {recipient}): {e}", exc_info=True)
            return False

    def _send_email(self, to_email: str, subject: str, html_content: str, text_content: str,
                    email_type: str) -> bool:
        """Send email using configured method"""
        if self.email_mode == 'disabled':
            logger.debug(f"Email disabled, dropped {email_type} to {to_email}")
            return True
        if self.email_mode == 'smtp':
            return self._send_smtp_email(to_email, subject, html_content, text_content)
        return self._send_console_email(to_email, subject, text_content, email_type)

    def _send_console_email(self, to_email: str, subject: str, text_content: str, email_type: str) -> bool:
        """Console email mode - logs the email for development"""
        logger.info(
            f"EMAIL ({email_type.upper()}) from={self.from_email} to={to_email} subject={subject!r} "
            f"at={datetime.now(timezone.utc).isoformat()}\n{text_content}"
        )
        return True

    def _send_smtp_email(self, to_email: str, subject: str, html_content: str, text_content: str) -> bool:
        msg = MIMEMultipart('alternative')
        msg['From'] = self.from_email
        msg['To'] = to_email
        msg['Subject'] = subject
        msg.attach(MIMEText(text_content, 'plain'))
        msg.attach(MIMEText(html_content, 'html'))

        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10) as server:
            server.starttls()
            if self.smtp_user:
                server.login(self.smtp_user, self.smtp_password)
            server.send_message(msg)

        logger.info(f"Email sent successfully to {to_email}")
        return True

    # ===============================
    # TEMPLATES
    # ===============================
    def _verify_email_template(self, fields: Dict[str, Any]) -> Tuple[str, str, str]:
        verification_url = f"{self.frontend_url}/verify-email?token={fields['token']}"
        subject = 'SecureTag - Verify Your Email'
        html_content = f"""
            <h2>Welcome to SecureTag!</h2>
            <p>Please click the link below to verify your email address:</p>
            <a href="{verification_url}">Verify Email</a>
            <p>This link will expire in 24 hours.</p>
        """
        text_content = (
            "Welcome to SecureTag!\n\n"
            f"Please verify your email address: {verification_url}\n\n"
            "This link will expire in 24 hours."
        )
        return subject, html_content, text_content

    def _contact_notification_template(self, fields: Dict[str, Any]) -> Tuple[str, str, str]:
        name = f"{fields['first_name']} {fields['last_name']}"
        company = fields.get('company') or 'Not provided'
        submitted = fields.get('submitted_at') or datetime.now(timezone.utc).isoformat()
        subject = f"New Contact Form Submission from {name}"
        html_content = f"""
            <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
                <h3>New SecureTag Contact Form Submission</h3>
                <p><strong>Name:</strong> {name}</p>
                <p><strong>Email:</strong> <a href="mailto:{fields['email']}">{fields['email']}</a></p>
                <p><strong>Company:</strong> {company}</p>
                <p><strong>Message:</strong></p>
                <p>{fields['message']}</p>
                <p><strong>Submitted:</strong> {submitted}</p>
            </div>
        """
        text_content = (
            f"Name: {name}\nEmail: {fields['email']}\nCompany: {company}\n"
            f"Submitted: {submitted}\n\n{fields['message']}"
        )
        return subject, html_content, text_content

    def _contact_confirmation_template(self, fields: Dict[str, Any]) -> Tuple[str, str, str]:
        subject = 'Thank you for contacting SecureTag'
        html_content = f"""
            <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
                <h3>Thank you for contacting SecureTag!</h3>
                <p>Dear {fields['first_name']},</p>
                <p>We have received your message and our team will review it shortly.
                   We typically respond within 24-48 hours during business days.</p>
                <div style="background: #f8f9fa; padding: 20px; border-left: 4px solid #06b6d4;">
                    <p style="font-style: italic;">"{fields['message']}"</p>
                </div>
                <p>Best regards,<br><strong>The SecureTag Team</strong></p>
                <p style="font-size: 12px;">This is an automated response. Please do not reply to this email.</p>
            </div>
        """
        text_content = (
            f"Dear {fields['first_name']},\n\n"
            "We have received your message and our team will review it shortly.\n"
            "We typically respond within 24-48 hours during business days.\n\n"
            f"Your message:\n\"{fields['message']}\"\n\n"
            "Best regards,\nThe SecureTag Team"
        )
        return subject, html_content, text_content
