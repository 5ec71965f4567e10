"""Domain models and API schemas."""

from support_desk.models.entities import (
    SortOrder,
    TicketEntity,
    TicketSortField,
    TicketStatus,
    UserEntity,
    UserRole,
)

__all__ = [
    "SortOrder",
    "TicketEntity",
    "TicketSortField",
    "TicketStatus",
    "UserEntity",
    "UserRole",
]
