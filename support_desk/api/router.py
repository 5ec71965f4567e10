from fastapi import APIRouter

from support_desk.api.routes.auth import router as auth_router
from support_desk.api.routes.health import router as health_router
from support_desk.api.routes.tickets import router as ticket_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(ticket_router, tags=["tickets"])
