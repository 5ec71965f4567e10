from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

TicketStatus = Literal["open", "inprogress", "resolved"]
UserRole = Literal["user", "agent", "admin"]
TicketSortField = Literal["createdAt", "updatedAt", "title", "status", "priority"]
SortOrder = Literal["asc", "desc"]

TICKET_PRIORITY_LABELS: dict[int, str] = {
    1: "low",
    2: "medium",
    3: "high",
    4: "urgent",
    5: "critical",
}
DEFAULT_TICKET_PRIORITY = 2


@dataclass(slots=True)
class TicketEntity:
    id: UUID
    title: str
    description: str
    status: TicketStatus
    priority: int
    assignee: str | None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class UserEntity:
    id: UUID
    email: str
    name: str
    password_hash: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
