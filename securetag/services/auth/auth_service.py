"""
Authentication Service
Registration, login and email verification
"""

import logging
from typing import Any, Dict

from securetag.core.exceptions import AuthError, ValidationError
from securetag.models import User, UserRole
from securetag.services.auth.token_service import TokenService
from securetag.services.email_service import VERIFY_EMAIL, NotificationSink
from securetag.services.tag_service import generate_secure_id
from securetag.stores.base import Store
from securetag.utils.date_helpers import utc_now
from securetag.utils.password_utils import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and email verification"""

    def __init__(self, store: Store, token_service: TokenService, notifier: NotificationSink,
                 bcrypt_rounds: int = 12):
        self.store = store
        self.token_service = token_service
        self.notifier = notifier
        self.bcrypt_rounds = bcrypt_rounds

    def register_user(self, cleaned: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an unverified account and send the verification email

        Args:
            cleaned: Output of AuthValidator.validate_registration_data

        Raises:
            ValidationError: If the email is already registered
            ConflictError: If a concurrent registration took the email first
        """
        if self.store.find_user_by_email(cleaned['email']):
            raise ValidationError("User already exists with this email")

        verification_token = generate_secure_id()
        user = User(
            first_name=cleaned['first_name'],
            last_name=cleaned['last_name'],
            email=cleaned['email'],
            password_hash=hash_password(cleaned['password'], rounds=self.bcrypt_rounds),
            company=cleaned['company'],
            role=UserRole(cleaned['role']),
            verification_token=verification_token,
            created_at=utc_now()
        )
        user = self.store.insert_user(user)
        logger.info(f"User registered: {user._id} ({user.role.value})")

        if not self.notifier.send(VERIFY_EMAIL, user.email, {'token': verification_token}):
            logger.warning(f"Verification email to {user.email} was not delivered")

        return {
            'message': 'User created successfully. Please check your email for verification.',
            'userId': str(user._id)
        }

    def authenticate(self, email: str, password: str) -> Dict[str, Any]:
        """
        Check credentials and issue an access token

        Raises:
            AuthError: Unknown email, wrong password or unverified account
        """
        user = self.store.find_user_by_email(email)
        if not user or not verify_password(user.password_hash, password):
            logger.warning(f"Login failed for {email}")
            raise AuthError("Invalid credentials")

        if not user.is_verified:
            logger.warning(f"Login attempt by unverified user {user._id}")
            raise AuthError("Please verify your email before logging in")

        now = utc_now()
        self.store.update_user(user._id, {'last_login': now})
        user.last_login = now

        issued = self.token_service.generate_token(str(user._id), user.email, user.role.value)

        return {
            'token': issued['token'],
            'expires_at': issued['expires_at'],
            'user': user.to_profile()
        }

    def verify_email(self, token: str) -> Dict[str, Any]:
        """
        Mark the account owning the token as verified

        Raises:
            ValidationError: If the token is unknown
        """
        if not isinstance(token, str) or not token:
            raise ValidationError("Invalid or expired verification token")

        user = self.store.find_user_by_verification_token(token)
        if not user:
            raise ValidationError("Invalid or expired verification token")

        self.store.update_user(user._id, {'is_verified': True}, unset=['verification_token'])
        logger.info(f"Email verified for user {user._id}")

        return {'message': 'Email verified successfully'}
