from typing import Any, Dict, Optional


def validate_verification_request(data: Optional[Dict[str, Any]], credential_field: str) -> Optional[str]:
    """
    Check the shape of a QR/NFC verification body

    Returns:
        Error message, or None if valid
    """
    if not isinstance(data, dict):
        return "Request body required"

    credential = data.get(credential_field)
    if not isinstance(credential, str) or not credential.strip():
        return f"{credential_field} is required"

    for field in ('location', 'deviceInfo'):
        if data.get(field) is not None and not isinstance(data[field], dict):
            return f"{field} must be an object"

    return None
