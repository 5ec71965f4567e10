import os
import pytest
from psycopg import connect
from psycopg.errors import CheckViolation, UniqueViolation
from support_desk.repositories.ticket_repository import TicketRepository
from support_desk.repositories.user_repository import UserRepository
from tests.helpers.db_env import isolated_database

DESCRIPTION = "Steps to reproduce are attached in the first comment."


@pytest.fixture(scope="module")
def repository_database_url() -> str:
    base_url = os.getenv("TEST_DATABASE_URL")
    if not base_url:
        pytest.skip("Set TEST_DATABASE_URL to run repository tests.")

    with isolated_database(base_url, schema_prefix="support_desk_repo_test") as scoped_url:
        yield scoped_url


@pytest.fixture(autouse=True)
def clean_database(repository_database_url: str) -> None:
    with connect(repository_database_url, autocommit=True) as connection:
        with connection.cursor() as cursor:
            cursor.execute("TRUNCATE TABLE tickets, users")


def test_ticket_repository_crud_and_soft_delete(repository_database_url: str) -> None:
    repository = TicketRepository(database_url=repository_database_url)

    created = repository.create(title="Broken login", description=DESCRIPTION, priority=3)
    assert created.status == "open"
    assert created.priority == 3
    assert created.is_deleted is False

    loaded = repository.get_by_id(created.id)
    assert loaded is not None
    assert loaded.title == "Broken login"

    updated = repository.update(
        ticket_id=created.id,
        changes={"status": "resolved", "assignee": "bob"},
    )
    assert updated is not None
    assert updated.status == "resolved"
    assert updated.assignee == "bob"
    assert updated.title == "Broken login"
    assert updated.updated_at >= created.updated_at

    deleted = repository.soft_delete(created.id)
    assert deleted is not None
    assert deleted.is_deleted is True

    assert repository.get_by_id(created.id) is None
    assert repository.update(ticket_id=created.id, changes={"priority": 1}) is None
    assert repository.soft_delete(created.id) is None

    with connect(repository_database_url) as connection:
        row = connection.execute(
            "SELECT is_deleted FROM tickets WHERE id = %s", (created.id,)
        ).fetchone()
    assert row == (True,)


def test_ticket_repository_rejects_unknown_update_columns(repository_database_url: str) -> None:
    repository = TicketRepository(database_url=repository_database_url)
    created = repository.create(title="Broken login", description=DESCRIPTION)

    with pytest.raises(ValueError):
        repository.update(ticket_id=created.id, changes={"is_deleted": True})


def test_ticket_table_constraints(repository_database_url: str) -> None:
    repository = TicketRepository(database_url=repository_database_url)

    with pytest.raises(CheckViolation):
        repository.create(title="Bad", description=DESCRIPTION)

    with pytest.raises(CheckViolation):
        repository.create(title="Valid title", description=DESCRIPTION, priority=9)

    with pytest.raises(CheckViolation):
        repository.create(title="Valid title", description=DESCRIPTION, status="closed")


def test_ticket_repository_list_filtered(repository_database_url: str) -> None:
    repository = TicketRepository(database_url=repository_database_url)

    t1 = repository.create(title="Deploy backend service", description=DESCRIPTION, priority=2)
    t2 = repository.create(title="Polish frontend page", description=DESCRIPTION, priority=5)
    t3 = repository.create(
        title="Backend 100% CPU",
        description=DESCRIPTION,
        status="resolved",
        priority=1,
    )
    hidden = repository.create(title="Backend ghost ticket", description=DESCRIPTION)
    repository.soft_delete(hidden.id)

    def list_ids(**overrides: object) -> tuple[list, int]:
        params = {
            "search": None,
            "status": None,
            "sort_field": "createdAt",
            "sort_order": "desc",
            "limit": 20,
            "offset": 0,
        }
        params.update(overrides)
        tickets, total = repository.list_filtered(**params)
        return [ticket.id for ticket in tickets], total

    assert list_ids() == ([t3.id, t2.id, t1.id], 3)
    assert list_ids(status="resolved") == ([t3.id], 1)
    assert list_ids(search="BACKEND", sort_order="asc") == ([t1.id, t3.id], 2)
    assert list_ids(search="100%") == ([t3.id], 1)
    assert list_ids(search="%") == ([t3.id], 1)
    assert list_ids(sort_field="priority", sort_order="asc") == ([t3.id, t1.id, t2.id], 3)
    assert list_ids(limit=2, offset=2) == ([t1.id], 3)
    assert list_ids(limit=2, offset=10) == ([], 3)
    assert list_ids(limit=100, offset=10**20) == ([], 3)


def test_user_repository_unique_email_ci(repository_database_url: str) -> None:
    repository = UserRepository(database_url=repository_database_url)

    created = repository.create(email="ada@example.com", name="Ada", password_hash="hash")
    assert created.role == "user"

    with pytest.raises(UniqueViolation):
        repository.create(email="ADA@example.com", name="Ada 2", password_hash="hash")

    found = repository.find_by_email("Ada@Example.com")
    assert found is not None
    assert found.id == created.id
    assert repository.find_by_email("nobody@example.com") is None
