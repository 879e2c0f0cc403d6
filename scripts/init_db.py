#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the NutriTrack schema and, optionally, a first administrator account.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --admin-email admin@example.com --admin-password 'Secr3t!pw'
"""

import sys
import os
import argparse
import logging

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from app.config import settings
from app.exceptions import ConflictError
from domain.enums import Role
from domain.models import SessionLocal, init_database
from domain.schemas.auth_schemas import SignUpRequest
from services.auth_service import AuthService

logger = logging.getLogger("nutritrack.scripts.init_db")


def create_admin(name: str, email: str, password: str) -> bool:
    """Create an ADMIN account; returns False when the email is taken"""
    payload = SignUpRequest(
        name=name, email=email, password=password, confirm_password=password
    )
    db = SessionLocal()
    try:
        user = AuthService.sign_up(db, payload, role=Role.ADMIN)
        logger.info(f"admin_created id={user.id} email={user.email}")
        return True
    except ConflictError:
        logger.warning(f"admin_exists email={email}")
        return False
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the NutriTrack database")
    parser.add_argument("--admin-name", default="Administrator")
    parser.add_argument("--admin-email")
    parser.add_argument("--admin-password")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )

    try:
        init_database()
    except Exception:
        logger.exception("Schema creation failed")
        return 1

    if args.admin_email and args.admin_password:
        create_admin(args.admin_name, args.admin_email, args.admin_password)
    return 0


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("NutriTrack Database Initialization")
    print("=" * 60 + "\n")

    exit_code = main()

    if exit_code == 0:
        print("\nSUCCESS! Your database is ready to use.\n")
    else:
        print("\nFAILED! Check the errors above.\n")

    sys.exit(exit_code)
