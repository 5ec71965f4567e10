from support_desk.core.db import ping_database
from support_desk.models.schemas.health import DatabaseHealth


class HealthRepository:
    def __init__(self, timeout_seconds: float = 3) -> None:
        self.timeout_seconds = timeout_seconds

    def check_connection(self, database_url: str) -> DatabaseHealth:
        connected, error_message = ping_database(
            database_url,
            timeout_seconds=self.timeout_seconds,
        )
        return DatabaseHealth(connected=connected, message=error_message)
