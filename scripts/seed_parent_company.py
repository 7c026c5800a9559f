#!/usr/bin/env python3
"""
Seed the parent (matrix) company and, optionally, its first super admin.

Idempotent: an existing parent is left untouched.

Run with: python scripts/seed_parent_company.py --admin-email admin@example.com
"""

import argparse
import asyncio
import getpass
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from brandhub.config import settings
from brandhub.database import async_session_maker
from brandhub.models.user import UserProfile
from brandhub.security.identity import Role
from brandhub.security.passwords import get_password_hash
from brandhub.services.hierarchy import ensure_parent_company
from brandhub.services.slug_policy import slugify


async def seed(name: str, admin_email: str | None, admin_password: str | None) -> None:
    async with async_session_maker() as db:
        parent = await ensure_parent_company(db, name=name, slug=slugify(name))
        print(f"Parent company: {parent.name} ({parent.slug}) id={parent.id}")

        if not admin_email:
            return

        result = await db.execute(select(UserProfile).where(UserProfile.email == admin_email))
        if result.scalar_one_or_none() is not None:
            print(f"User {admin_email} already exists, skipping")
            return

        admin = UserProfile(
            email=admin_email,
            hashed_password=get_password_hash(admin_password),
            full_name="Super Admin",
            role=Role.SUPER_ADMIN.value,
            company_id=parent.id,
            is_active=True,
        )
        db.add(admin)
        await db.commit()
        print(f"Created super admin {admin_email}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the parent company")
    parser.add_argument("--name", default=settings.PARENT_COMPANY_NAME, help="Parent company name")
    parser.add_argument("--admin-email", help="Create a super admin with this email")
    args = parser.parse_args()

    password = None
    if args.admin_email:
        password = os.environ.get("SEED_ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
        if len(password) < 8:
            parser.error("admin password must be at least 8 characters")

    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed(args.name, args.admin_email, password))


if __name__ == "__main__":
    main()
