from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from support_desk.models.entities import TicketEntity, UserEntity
from support_desk.repositories.ticket_repository import SORT_COLUMNS


class FakeUserRepository:
    def __init__(self) -> None:
        self.store: dict[UUID, UserEntity] = {}

    def create(
        self,
        *,
        email: str,
        name: str,
        password_hash: str,
        role: str = "user",
        connection: object | None = None,
    ) -> UserEntity:
        now = datetime.now(UTC)
        user = UserEntity(
            id=uuid4(),
            email=email,
            name=name,
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        self.store[user.id] = user
        return user

    def find_by_email(self, email: str, connection: object | None = None) -> UserEntity | None:
        for user in self.store.values():
            if user.email.lower() == email.lower():
                return user
        return None


class FakeTicketRepository:
    def __init__(self) -> None:
        self.store: dict[UUID, TicketEntity] = {}
        self._clock = datetime(2026, 1, 1, tzinfo=UTC)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def create(
        self,
        *,
        title: str,
        description: str,
        status: str = "open",
        priority: int = 2,
        assignee: str | None = None,
        connection: object | None = None,
    ) -> TicketEntity:
        now = self._tick()
        ticket = TicketEntity(
            id=uuid4(),
            title=title,
            description=description,
            status=status,
            priority=priority,
            assignee=assignee,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )
        self.store[ticket.id] = ticket
        return ticket

    def get_by_id(self, ticket_id: UUID, connection: object | None = None) -> TicketEntity | None:
        ticket = self.store.get(ticket_id)
        if ticket is None or ticket.is_deleted:
            return None
        return ticket

    def update(
        self,
        *,
        ticket_id: UUID,
        changes: dict[str, Any],
        connection: object | None = None,
    ) -> TicketEntity | None:
        current = self.get_by_id(ticket_id)
        if current is None:
            return None
        for field, value in changes.items():
            setattr(current, field, value)
        current.updated_at = self._tick()
        return current

    def soft_delete(self, ticket_id: UUID, connection: object | None = None) -> TicketEntity | None:
        current = self.get_by_id(ticket_id)
        if current is None:
            return None
        current.is_deleted = True
        current.updated_at = self._tick()
        return current

    def list_filtered(
        self,
        *,
        search: str | None,
        status: str | None,
        sort_field: str,
        sort_order: str,
        limit: int,
        offset: int,
        connection: object | None = None,
    ) -> tuple[list[TicketEntity], int]:
        items = [item for item in self.store.values() if not item.is_deleted]
        if status is not None:
            items = [item for item in items if item.status == status]
        if search:
            items = [item for item in items if search.lower() in item.title.lower()]

        attribute = SORT_COLUMNS[sort_field]
        items.sort(
            key=lambda item: (getattr(item, attribute), str(item.id)),
            reverse=sort_order == "desc",
        )
        total = len(items)
        return (items[offset : offset + limit], total)
