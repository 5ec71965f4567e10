import math
from typing import Any, NoReturn
from uuid import UUID

from fastapi import status

from support_desk.core.errors import AppError
from support_desk.core.logging import get_logger
from support_desk.models.entities import (
    TICKET_PRIORITY_LABELS,
    SortOrder,
    TicketEntity,
    TicketSortField,
    TicketStatus,
)
from support_desk.models.schemas.ticket import (
    TicketCreateRequest,
    TicketDeleteResponse,
    TicketListResponse,
    TicketRead,
    TicketUpdateRequest,
)
from support_desk.repositories.ticket_repository import TicketRepository

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 80
DESCRIPTION_MIN_LENGTH = 20
MAX_PAGE = 1_000_000
NON_NULLABLE_FIELDS = ("title", "description", "status", "priority")

logger = get_logger(__name__)


class TicketService:
    def __init__(self, ticket_repository: TicketRepository) -> None:
        self.ticket_repository = ticket_repository

    def list_tickets(
        self,
        *,
        page: int,
        limit: int,
        search: str | None,
        status: TicketStatus | None,
        sort_field: TicketSortField,
        sort_order: SortOrder,
    ) -> TicketListResponse:
        tickets, total = self.ticket_repository.list_filtered(
            search=search or None,
            status=status,
            sort_field=sort_field,
            sort_order=sort_order,
            limit=limit,
            offset=(page - 1) * limit,
        )
        return TicketListResponse(
            tickets=[self._to_ticket_read(ticket) for ticket in tickets],
            total=total,
            page=page,
            pages=math.ceil(total / limit),
        )

    def get_ticket(self, ticket_id: str) -> TicketRead:
        ticket = self.ticket_repository.get_by_id(self._parse_ticket_id(ticket_id))
        if ticket is None:
            self._raise_ticket_not_found(ticket_id)
        return self._to_ticket_read(ticket)

    def create_ticket(self, payload: TicketCreateRequest) -> TicketRead:
        ticket = self.ticket_repository.create(
            title=self._validate_title(payload.title),
            description=self._validate_description(payload.description),
            status=payload.status,
            priority=self._validate_priority(payload.priority),
            assignee=self._normalize_assignee(payload.assignee),
        )
        logger.info(
            "Ticket created",
            extra={"ticket_id": str(ticket.id), "priority": ticket.priority},
        )
        return self._to_ticket_read(ticket)

    def update_ticket(self, ticket_id: str, payload: TicketUpdateRequest) -> TicketRead:
        parsed_id = self._parse_ticket_id(ticket_id)
        changes = self._validate_changes(payload.model_dump(exclude_unset=True))

        if not changes:
            current = self.ticket_repository.get_by_id(parsed_id)
            if current is None:
                self._raise_ticket_not_found(ticket_id)
            return self._to_ticket_read(current)

        updated = self.ticket_repository.update(ticket_id=parsed_id, changes=changes)
        if updated is None:
            self._raise_ticket_not_found(ticket_id)
        logger.info(
            "Ticket updated",
            extra={"ticket_id": ticket_id, "fields": sorted(changes)},
        )
        return self._to_ticket_read(updated)

    def delete_ticket(self, ticket_id: str) -> TicketDeleteResponse:
        deleted = self.ticket_repository.soft_delete(self._parse_ticket_id(ticket_id))
        if deleted is None:
            self._raise_ticket_not_found(ticket_id)
        logger.info("Ticket soft-deleted", extra={"ticket_id": ticket_id})
        return TicketDeleteResponse()

    def _validate_changes(self, raw_changes: dict[str, Any]) -> dict[str, Any]:
        for field in NON_NULLABLE_FIELDS:
            if field in raw_changes and raw_changes[field] is None:
                raise AppError(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    code="INVALID_TICKET_UPDATE",
                    message=f"Ticket {field} cannot be null.",
                    details={"field": field},
                )

        changes = dict(raw_changes)
        if "title" in changes:
            changes["title"] = self._validate_title(changes["title"])
        if "description" in changes:
            changes["description"] = self._validate_description(changes["description"])
        if "priority" in changes:
            changes["priority"] = self._validate_priority(changes["priority"])
        if "assignee" in changes:
            changes["assignee"] = self._normalize_assignee(changes["assignee"])
        return changes

    def _to_ticket_read(self, ticket: TicketEntity) -> TicketRead:
        return TicketRead(
            id=ticket.id,
            title=ticket.title,
            description=ticket.description,
            status=ticket.status,
            priority=ticket.priority,
            assignee=ticket.assignee,
            is_deleted=ticket.is_deleted,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )

    def _parse_ticket_id(self, ticket_id: str) -> UUID:
        try:
            return UUID(ticket_id)
        except ValueError:
            self._raise_ticket_not_found(ticket_id)

    def _validate_title(self, title: str) -> str:
        normalized = title.strip()
        if not TITLE_MIN_LENGTH <= len(normalized) <= TITLE_MAX_LENGTH:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_TICKET_TITLE",
                message=(
                    f"Ticket title length must be between {TITLE_MIN_LENGTH} "
                    f"and {TITLE_MAX_LENGTH} characters."
                ),
            )
        return normalized

    def _validate_description(self, description: str) -> str:
        normalized = description.strip()
        if len(normalized) < DESCRIPTION_MIN_LENGTH:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_TICKET_DESCRIPTION",
                message=(
                    f"Ticket description must be at least {DESCRIPTION_MIN_LENGTH} characters."
                ),
            )
        return normalized

    def _validate_priority(self, priority: int) -> int:
        if priority not in TICKET_PRIORITY_LABELS:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_TICKET_PRIORITY",
                message="Ticket priority must be an integer between 1 and 5.",
                details={"allowed": TICKET_PRIORITY_LABELS},
            )
        return priority

    def _normalize_assignee(self, assignee: str | None) -> str | None:
        if assignee is None:
            return None
        return assignee.strip() or None

    def _raise_ticket_not_found(self, ticket_id: str) -> NoReturn:
        raise AppError(
            status_code=status.HTTP_404_NOT_FOUND,
            code="TICKET_NOT_FOUND",
            message="Ticket not found",
            details={"ticket_id": ticket_id},
        )
