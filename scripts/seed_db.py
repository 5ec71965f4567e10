"""Seed an administrator account and a handful of demo tickets.

The API never grants elevated roles, so this script is how the first admin is
created. Credentials come from SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD /
SEED_ADMIN_NAME; DATABASE_URL is read the same way the application reads it.
"""

from __future__ import annotations

import os

from support_desk.core.config import get_settings
from support_desk.core.database import close_pools
from support_desk.core.security import hash_password
from support_desk.repositories.ticket_repository import TicketRepository
from support_desk.repositories.user_repository import UserRepository

DEMO_TICKETS: list[dict[str, object]] = [
    {
        "title": "Cannot reset my password",
        "description": "The reset link in the email returns a 404 page every time I open it.",
        "status": "open",
        "priority": 3,
    },
    {
        "title": "Invoice shows wrong VAT rate",
        "description": "March invoice was generated with 19% VAT instead of the 7% reduced rate.",
        "status": "inprogress",
        "priority": 2,
        "assignee": "billing-team",
    },
    {
        "title": "Dashboard loads slowly",
        "description": "The main dashboard takes more than ten seconds to render for our account.",
        "status": "resolved",
        "priority": 1,
    },
]


def resolve_admin_credentials() -> tuple[str, str, str]:
    email = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com").strip().lower()
    password = os.getenv("SEED_ADMIN_PASSWORD")
    name = os.getenv("SEED_ADMIN_NAME", "Administrator")
    if not password:
        raise RuntimeError("SEED_ADMIN_PASSWORD is not set.")
    return email, password, name


def seed_admin(user_repository: UserRepository) -> None:
    email, password, name = resolve_admin_credentials()
    if user_repository.find_by_email(email) is not None:
        print(f"Admin {email} already exists, skipping.")
        return
    user = user_repository.create(
        email=email,
        name=name,
        password_hash=hash_password(password),
        role="admin",
    )
    print(f"Created admin {user.email} ({user.id}).")


def seed_tickets(ticket_repository: TicketRepository) -> None:
    for ticket in DEMO_TICKETS:
        created = ticket_repository.create(**ticket)
        print(f"Created ticket {created.id}: {created.title}")


def main() -> None:
    database_url = get_settings().database_url
    try:
        seed_admin(UserRepository(database_url=database_url))
        seed_tickets(TicketRepository(database_url=database_url))
    finally:
        close_pools()
    print("Seed completed successfully.")


if __name__ == "__main__":
    main()
