"""
Create a verified admin account

    python scripts/create_admin.py --email admin@example.com --first-name Ada --last-name Admin
"""
import argparse
import getpass
import sys

from securetag.config import Settings
from securetag.core.exceptions import ConflictError, SecureTagError
from securetag.models import User, UserRole
from securetag.stores import build_store
from securetag.utils.date_helpers import utc_now
from securetag.utils.password_utils import hash_password
from securetag.validators import normalize_email
from securetag.validators.auth_validator import MIN_PASSWORD_LENGTH


def create_admin(store, settings, email, password, first_name, last_name, company=''):
    if store.find_user_by_email(email):
        print(f"❌ User already exists: {email}")
        return False

    admin = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=hash_password(password, rounds=settings.bcrypt_rounds),
        company=company,
        role=UserRole.ADMIN,
        is_verified=True,
        created_at=utc_now()
    )

    try:
        admin = store.insert_user(admin)
    except ConflictError:
        print(f"❌ User already exists: {email}")
        return False

    print(f"✅ Admin created: {email} (ID: {admin._id})")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description='Create a verified SecureTag admin user')
    parser.add_argument('--email', required=True)
    parser.add_argument('--first-name', required=True)
    parser.add_argument('--last-name', required=True)
    parser.add_argument('--company', default='')
    parser.add_argument('--password', help='Prompted for when omitted')
    args = parser.parse_args(argv)

    email = normalize_email(args.email)
    if email is None:
        parser.error(f"Invalid email address: {args.email}")

    password = args.password or getpass.getpass('Password: ')
    if len(password) < MIN_PASSWORD_LENGTH:
        parser.error(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    try:
        settings = Settings.from_env()
        store = build_store(settings)
    except SecureTagError as e:
        print(f"❌ {e.message}")
        return 1

    try:
        created = create_admin(store, settings, email, password,
                               args.first_name, args.last_name, args.company)
    finally:
        store.close()

    return 0 if created else 1


if __name__ == '__main__':
    sys.exit(main())
