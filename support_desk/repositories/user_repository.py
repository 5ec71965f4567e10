from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from psycopg import Connection

from support_desk.core.database import get_connection
from support_desk.models.entities import UserEntity, UserRole

USER_COLUMNS = "id, email, name, password_hash, role, created_at, updated_at"


def _to_user_entity(row: dict[str, Any]) -> UserEntity:
    return UserEntity(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        role=row["role"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserRepository:
    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url

    @contextmanager
    def _use_connection(self, connection: Connection | None) -> Iterator[Connection]:
        if connection is not None:
            yield connection
            return
        with get_connection(self.database_url) as managed:
            yield managed

    def create(
        self,
        *,
        email: str,
        name: str,
        password_hash: str,
        role: UserRole = "user",
        connection: Connection | None = None,
    ) -> UserEntity:
        query = f"""
            INSERT INTO users (email, name, password_hash, role)
            VALUES (%s, %s, %s, %s)
            RETURNING {USER_COLUMNS}
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (email, name, password_hash, role))
                row = cursor.fetchone()
        if row is None:
            raise RuntimeError("Failed to create user.")
        return _to_user_entity(row)

    def find_by_email(
        self,
        email: str,
        connection: Connection | None = None,
    ) -> UserEntity | None:
        query = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE LOWER(email) = LOWER(%s)
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (email,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_user_entity(row)

