from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from psycopg import Connection

from support_desk.core.database import get_connection
from support_desk.models.entities import SortOrder, TicketEntity, TicketSortField, TicketStatus

TICKET_COLUMNS = (
    "id, title, description, status, priority, assignee, is_deleted, created_at, updated_at"
)

SORT_COLUMNS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "status": "status",
    "priority": "priority",
}
UPDATABLE_COLUMNS = ("title", "description", "status", "priority", "assignee")


def _to_ticket_entity(row: dict[str, Any]) -> TicketEntity:
    return TicketEntity(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=row["status"],
        priority=row["priority"],
        assignee=row["assignee"],
        is_deleted=row["is_deleted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TicketRepository:
    """Ticket persistence. Soft-deleted rows are invisible to every method."""

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
        title: str,
        description: str,
        status: TicketStatus = "open",
        priority: int = 2,
        assignee: str | None = None,
        connection: Connection | None = None,
    ) -> TicketEntity:
        query = f"""
            INSERT INTO tickets (title, description, status, priority, assignee)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {TICKET_COLUMNS}
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (title, description, status, priority, assignee))
                created = cursor.fetchone()
        if created is None:
            raise RuntimeError("Failed to create ticket.")
        return _to_ticket_entity(created)

    def get_by_id(
        self,
        ticket_id: UUID,
        connection: Connection | None = None,
    ) -> TicketEntity | None:
        query = f"""
            SELECT {TICKET_COLUMNS}
            FROM tickets
            WHERE id = %s AND is_deleted = FALSE
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (ticket_id,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_ticket_entity(row)

    def update(
        self,
        *,
        ticket_id: UUID,
        changes: dict[str, Any],
        connection: Connection | None = None,
    ) -> TicketEntity | None:
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update ticket columns: {sorted(unknown)}")

        columns = [column for column in UPDATABLE_COLUMNS if column in changes]
        assignments = [f"{column} = %s" for column in columns]
        assignments.append("updated_at = NOW()")
        query = f"""
            UPDATE tickets
            SET {", ".join(assignments)}
            WHERE id = %s AND is_deleted = FALSE
            RETURNING {TICKET_COLUMNS}
        """
        params = [changes[column] for column in columns]
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (*params, ticket_id))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_ticket_entity(row)

    def soft_delete(
        self,
        ticket_id: UUID,
        connection: Connection | None = None,
    ) -> TicketEntity | None:
        query = f"""
            UPDATE tickets
            SET is_deleted = TRUE,
                updated_at = NOW()
            WHERE id = %s AND is_deleted = FALSE
            RETURNING {TICKET_COLUMNS}
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (ticket_id,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_ticket_entity(row)

    def list_filtered(
        self,
        *,
        search: str | None,
        status: TicketStatus | None,
        sort_field: TicketSortField,
        sort_order: SortOrder,
        limit: int,
        offset: int,
        connection: Connection | None = None,
    ) -> tuple[list[TicketEntity], int]:
        where_clauses: list[str] = ["t.is_deleted = FALSE"]
        params: list[Any] = []

        if status is not None:
            where_clauses.append("t.status = %s")
            params.append(status)

        if search:
            where_clauses.append("t.title ILIKE %s")
            params.append(f"%{escape_like(search)}%")

        where_sql = "WHERE " + " AND ".join(where_clauses)
        direction = "ASC" if sort_order == "asc" else "DESC"
        order_sql = f"ORDER BY t.{SORT_COLUMNS[sort_field]} {direction}, t.id {direction}"

        list_query = f"""
            SELECT
                t.id,
                t.title,
                t.description,
                t.status,
                t.priority,
                t.assignee,
                t.is_deleted,
                t.created_at,
                t.updated_at
            FROM tickets t
            {where_sql}
            {order_sql}
            LIMIT %s OFFSET %s
        """
        count_query = f"""
            SELECT COUNT(1) AS total
            FROM tickets t
            {where_sql}
        """
        list_params = [*params, limit, offset]

        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(count_query, params)
                count_row = cursor.fetchone()
                total = int(count_row["total"]) if count_row is not None else 0
                if offset >= total:
                    return ([], total)

                cursor.execute(list_query, list_params)
                rows = cursor.fetchall()

        return ([_to_ticket_entity(row) for row in rows], total)
