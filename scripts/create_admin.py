#!/usr/bin/env python3
"""
Create an admin user, or promote an existing one
"""

import argparse
import sys
from getpass import getpass
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from aistudio.database import Base, SessionLocal, sync_engine
from aistudio.models import User
from aistudio.services.auth_service import AuthService
from aistudio.services.settings_defaults import get_default_setting


def create_admin(email: str, password: str = None, name: str = None):
    """Create or promote an admin user"""
    Base.metadata.create_all(sync_engine, checkfirst=True)
    db = SessionLocal()

    try:
        user = db.query(User).filter(User.email == email.lower()).first()
        if user:
            user.role = "admin"
            db.commit()
            print(f"User '{email}' is now an admin")
            return

        if not password:
            password = getpass("Enter password: ")
            confirm = getpass("Confirm password: ")

            if password != confirm:
                print("Error: Passwords do not match")
                sys.exit(1)

        if len(password) < 6:
            print("Error: Password must be at least 6 characters")
            sys.exit(1)

        db.add(
            User(
                email=email.lower(),
                name=name,
                hashed_password=AuthService.get_password_hash(password),
                role="admin",
                credits=get_default_setting("users.default_admin_credits") or 0,
                is_active=True,
            )
        )
        db.commit()
        print(f"Admin '{email}' created")

    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--name", help="Display name")
    parser.add_argument(
        "--password", help="Password (optional, will prompt if not provided)"
    )

    args = parser.parse_args()
    create_admin(args.email, args.password, args.name)
