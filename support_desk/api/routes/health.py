from typing import Annotated

from fastapi import APIRouter, Depends

from support_desk.core.config import Settings, get_settings
from support_desk.models.schemas.health import HealthResponse
from support_desk.repositories.health_repository import HealthRepository
from support_desk.services.health_service import HealthService

router = APIRouter()


def get_health_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthService:
    return HealthService(
        repository=HealthRepository(timeout_seconds=settings.health_check_timeout_seconds),
        settings=settings,
    )


@router.get("/health", response_model=HealthResponse)
def health(
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> HealthResponse:
    return health_service.get_health()
