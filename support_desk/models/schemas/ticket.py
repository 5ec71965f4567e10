from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, StrictInt

from support_desk.models.entities import DEFAULT_TICKET_PRIORITY, TicketStatus
from support_desk.models.schemas.base import CamelCaseModel

ASSIGNEE_MAX_LENGTH = 200

Assignee = Annotated[str, Field(max_length=ASSIGNEE_MAX_LENGTH)] | None


class TicketCreateRequest(CamelCaseModel):
    title: str
    description: str
    status: TicketStatus = "open"
    priority: StrictInt = DEFAULT_TICKET_PRIORITY
    assignee: Assignee = None


class TicketUpdateRequest(CamelCaseModel):
    title: str | None = None
    description: str | None = None
    status: TicketStatus | None = None
    priority: StrictInt | None = None
    assignee: Assignee = None


class TicketRead(CamelCaseModel):
    id: UUID
    title: str
    description: str
    status: TicketStatus
    priority: int
    assignee: str | None = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime


class TicketListResponse(CamelCaseModel):
    tickets: list[TicketRead]
    total: int
    page: int
    pages: int


class TicketDeleteResponse(CamelCaseModel):
    message: str = "Ticket deleted successfully"
