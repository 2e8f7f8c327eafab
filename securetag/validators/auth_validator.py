# validators/auth_validator.py
"""
Authentication Input Validation
Business-level validation for registration, login and email verification
"""

from typing import Any, Dict, Optional

from email_validator import EmailNotValidError, validate_email

from securetag.models import UserRole

MIN_PASSWORD_LENGTH = 8

# Admins are created with scripts/create_admin.py only
REGISTERABLE_ROLES = [r.value for r in UserRole if r is not UserRole.ADMIN]


def normalize_email(email: Any) -> Optional[str]:
    """Lower-cased, syntax-checked address, or None if invalid"""
    if not isinstance(email, str) or not email.strip():
        return None
    try:
        result = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    return result.normalized.lower()


class AuthValidator:
    """Validator for authentication-related operations"""

    @staticmethod
    def validate_registration_data(data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate user registration data

        Returns:
            Dict with 'valid', 'errors' and 'cleaned_data'
        """
        errors = []
        data = data if isinstance(data, dict) else {}

        def text(field: str) -> str:
            value = data.get(field)
            return value.strip() if isinstance(value, str) else ''

        first_name = text('firstName')
        last_name = text('lastName')
        if not first_name:
            errors.append("First name is required")
        if not last_name:
            errors.append("Last name is required")

        email = normalize_email(data.get('email'))
        if not data.get('email'):
            errors.append("Email is required")
        elif email is None:
            errors.append("Please provide a valid email address")

        password = data.get('password')
        if not isinstance(password, str) or not password:
            errors.append("Password is required")
        elif len(password) < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        role = data.get('role') or UserRole.CONSUMER.value
        if role not in REGISTERABLE_ROLES:
            errors.append(f"Role must be one of: {', '.join(REGISTERABLE_ROLES)}")

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'cleaned_data': {
                'first_name': first_name,
                'last_name': last_name,
                'email': email,
                'password': password,
                'company': text('company'),
                'role': role
            }
        }

    @staticmethod
    def validate_login_data(data: Dict[str, Any]) -> Optional[str]:
        """
        Validate login credentials

        Returns:
            Error message if validation fails, None if valid
        """
        if not data or not isinstance(data, dict):
            return "No data provided"

        if not isinstance(data.get('email'), str) or not data.get('email').strip():
            return "Email is required"

        if not isinstance(data.get('password'), str) or not data.get('password'):
            return "Password is required"

        return None
