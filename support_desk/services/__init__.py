"""Business services."""

from support_desk.services.auth_service import AuthService
from support_desk.services.health_service import HealthService
from support_desk.services.ticket_service import TicketService

__all__ = ["AuthService", "HealthService", "TicketService"]
