from support_desk.core.config import Settings
from support_desk.core.logging import get_logger
from support_desk.models.schemas.health import HealthResponse
from support_desk.repositories.health_repository import HealthRepository

logger = get_logger(__name__)


class HealthService:
    def __init__(self, repository: HealthRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    def get_health(self) -> HealthResponse:
        database_health = self.repository.check_connection(self.settings.database_url)
        if not database_health.connected:
            logger.warning("Database unreachable", extra={"reason": database_health.message})
        return HealthResponse(
            status="ok" if database_health.connected else "degraded",
            environment=self.settings.app_env,
            database=database_health,
        )
