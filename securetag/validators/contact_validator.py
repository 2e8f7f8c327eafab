"""
Contact Form Validation
Field rules and HTML sanitizing for public contact submissions
"""

import html
from typing import Any, Dict

from securetag.validators.auth_validator import normalize_email


def _length_error(value: str, label: str, minimum: int, maximum: int):
    if len(value) < minimum or len(value) > maximum:
        return f"{label} must be between {minimum} and {maximum} characters"
    return None


class ContactValidator:

    @staticmethod
    def validate_contact_form(data: Dict[str, Any]) -> Dict[str, Any]:
        errors = []
        data = data if isinstance(data, dict) else {}

        def text(field: str) -> str:
            value = data.get(field)
            return value.strip() if isinstance(value, str) else ''

        first_name = text('firstName')
        last_name = text('lastName')
        message = text('message')
        company = text('company')

        if not first_name:
            errors.append("First name is required")
        else:
            error = _length_error(first_name, "First name", 2, 50)
            if error:
                errors.append(error)

        if not last_name:
            errors.append("Last name is required")
        else:
            error = _length_error(last_name, "Last name", 2, 50)
            if error:
                errors.append(error)

        email = None
        if not text('email'):
            errors.append("Email is required")
        else:
            email = normalize_email(data.get('email'))
            if email is None:
                errors.append("Please provide a valid email address")

        if not message:
            errors.append("Message is required")
        else:
            error = _length_error(message, "Message", 10, 1000)
            if error:
                errors.append(error)

        if len(company) > 100:
            errors.append("Company name must be less than 100 characters")

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'cleaned_data': {
                'first_name': html.escape(first_name),
                'last_name': html.escape(last_name),
                'email': email,
                'company': html.escape(company),
                'message': html.escape(message)
            }
        }
