from psycopg import Error as PsycopgError

from support_desk.core.database import get_pool


def ping_database(database_url: str, timeout_seconds: float = 3) -> tuple[bool, str | None]:
    try:
        with get_pool(database_url).connection(timeout=timeout_seconds) as connection:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1 AS ok")
                result = cursor.fetchone()
        if result and result["ok"] == 1:
            return True, None
        return False, "Database ping returned an unexpected result."
    except PsycopgError as exc:
        return False, str(exc)
