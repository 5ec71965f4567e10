from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from support_desk.api.auth import CurrentUser, require_ticket_delete_role
from support_desk.models.entities import SortOrder, TicketSortField, TicketStatus
from support_desk.models.schemas.auth import PublicUser
from support_desk.models.schemas.ticket import (
    TicketCreateRequest,
    TicketDeleteResponse,
    TicketListResponse,
    TicketRead,
    TicketUpdateRequest,
)
from support_desk.repositories.ticket_repository import TicketRepository
from support_desk.services.ticket_service import MAX_PAGE, TicketService

router = APIRouter(prefix="/tickets")


@lru_cache
def get_ticket_service() -> TicketService:
    return TicketService(ticket_repository=TicketRepository())


@router.get("", response_model=TicketListResponse)
def list_tickets(
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
    page: Annotated[int, Query(ge=1, le=MAX_PAGE)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    search: Annotated[str | None, Query()] = None,
    status: Annotated[TicketStatus | None, Query()] = None,
    sort_field: Annotated[TicketSortField, Query(alias="sortField")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
) -> TicketListResponse:
    return ticket_service.list_tickets(
        page=page,
        limit=limit,
        search=search,
        status=status,
        sort_field=sort_field,
        sort_order=sort_order,
    )


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: TicketCreateRequest,
    _: CurrentUser,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketRead:
    return ticket_service.create_ticket(payload)


@router.get("/{ticket_id}", response_model=TicketRead)
def get_ticket(
    ticket_id: str,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketRead:
    return ticket_service.get_ticket(ticket_id)


@router.patch("/{ticket_id}", response_model=TicketRead)
def update_ticket(
    ticket_id: str,
    payload: TicketUpdateRequest,
    _: CurrentUser,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketRead:
    return ticket_service.update_ticket(ticket_id, payload)


@router.delete("/{ticket_id}", response_model=TicketDeleteResponse)
def delete_ticket(
    ticket_id: str,
    _: Annotated[PublicUser, Depends(require_ticket_delete_role)],
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketDeleteResponse:
    return ticket_service.delete_ticket(ticket_id)
