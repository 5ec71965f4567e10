"""Pydantic schema definitions."""

from support_desk.models.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    PublicUser,
    RegisterRequest,
)
from support_desk.models.schemas.base import CamelCaseModel
from support_desk.models.schemas.health import DatabaseHealth, HealthResponse
from support_desk.models.schemas.ticket import (
    TicketCreateRequest,
    TicketDeleteResponse,
    TicketListResponse,
    TicketRead,
    TicketUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "CamelCaseModel",
    "DatabaseHealth",
    "HealthResponse",
    "LoginRequest",
    "MeResponse",
    "PublicUser",
    "RegisterRequest",
    "TicketCreateRequest",
    "TicketDeleteResponse",
    "TicketListResponse",
    "TicketRead",
    "TicketUpdateRequest",
]
