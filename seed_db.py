"""Seed the configured database with demo accounts and ideas.

Run with:
    python seed_db.py
"""

import asyncio

from ideaboard.config import settings
from ideaboard.database import Database
from ideaboard.errors import DuplicateAccount
from ideaboard.services.accounts import AccountDirectory
from ideaboard.services.ideas import IdeaLedger

USERS = [
    ("Ann Builder", "555-0001", "secret1"),
    ("Bob Designer", "555-0002", "secret2"),
    ("Charlie Research", "555-0003", "secret3"),
]

IDEAS = [
    # (phone, text, project, module, section, status)
    ("555-0001", "Add dark mode to the settings page", "dashboard", "settings", "ui-ux", "approved"),
    ("555-0001", "Cache report queries for the weekly export", "api", "reporting", "backend", "in-progress"),
    ("555-0002", "Redesign the notification bell", "web-app", "notifications", "frontend", "pending"),
    ("555-0002", "Single sign-on for the mobile app", "mobile-app", "authentication", "backend", "rejected"),
    ("555-0003", "Nightly backup verification job", "database", "analytics", "deployment", "completed"),
]


async def async_main():
    database = Database(settings.DATABASE_URL)
    await database.init()

    async with database.session() as session:
        accounts = AccountDirectory(session)
        ledger = IdeaLedger(session)

        users = {}
        for full_name, phone, password in USERS:
            try:
                users[phone] = await accounts.register(full_name, phone, password)
                print(f"Registered {full_name} ({phone})")
            except DuplicateAccount:
                users[phone] = await accounts.get_by_phone(phone)
                print(f"Skipped {full_name} ({phone}): already registered")

        for phone, text, project, module, section, status in IDEAS:
            owner = users[phone]
            idea = await ledger.submit(text, project, module, section, owner.full_name, owner.id)
            if status != "pending":
                await ledger.update_status(idea.id, status)
            print(f"  Idea #{idea.id} [{status}] {text}")

    await database.shutdown()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(async_main())
