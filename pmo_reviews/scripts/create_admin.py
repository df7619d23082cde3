#!/usr/bin/env python3
"""
Create the initial admin account.

Reads the account from the environment:
- ADMIN_EMAIL
- ADMIN_PASSWORD
- ADMIN_NAME (optional)

Running it again for an existing email leaves the account untouched.

Usage:
    python -m pmo_reviews.scripts.create_admin
"""

import asyncio
import os
import sys

from pmo_reviews.api.deps import ServiceContainer
from pmo_reviews.core.config import settings
from pmo_reviews.core.exceptions import PMOReviewError

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")


async def main() -> int:
    """Create the admin account and report what happened."""
    if not ADMIN_EMAIL or not ADMIN_PASSWORD:
        print("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return 1

    if settings.database.backend != "postgres":
        print("Warning: DATABASE_BACKEND is not 'postgres'; the account will not persist")

    container = ServiceContainer(settings)
    try:
        user, created = await container.auth_service.ensure_admin(
            ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
        )
    except PMOReviewError as e:
        print(f"Failed to create admin: {e.message}")
        return 1
    finally:
        await container.close()

    if created:
        print(f"Created admin {user.email} ({user.id})")
    else:
        print(f"Admin {user.email} already exists ({user.id}), role: {user.role}")
    return 0


def run() -> None:
    """Console entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
