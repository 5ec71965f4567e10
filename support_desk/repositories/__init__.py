"""Database repositories."""

from support_desk.repositories.health_repository import HealthRepository
from support_desk.repositories.ticket_repository import TicketRepository
from support_desk.repositories.user_repository import UserRepository

__all__ = [
    "HealthRepository",
    "TicketRepository",
    "UserRepository",
]
