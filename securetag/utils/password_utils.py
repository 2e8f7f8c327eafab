import logging

import bcrypt

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash password using bcrypt"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_password(stored_hash: str, provided_password: str) -> bool:
    """Verify password against stored bcrypt hash"""
    if not stored_hash or not provided_password:
        return False
    try:
        return bcrypt.checkpw(provided_password.encode('utf-8'), stored_hash.encode('utf-8'))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False
