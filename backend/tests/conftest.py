import asyncio
import datetime
from decimal import Decimal

import pytest

from truefreelance.adapters.memory import InMemoryProjectAdapter
from truefreelance.core.errors import StorageError
from truefreelance.schemas.project import Project, ProjectFields
from truefreelance.services.project_store import ProjectStore

UTC = datetime.timezone.utc


class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start=datetime.datetime(2024, 1, 1, 9, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime.datetime:
        value = self.now
        self.now += datetime.timedelta(seconds=1)
        return value


class FlakyAdapter(InMemoryProjectAdapter):
    """In-memory adapter whose writes can be switched to fail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.failing = False
        self.fail_load = False

    async def load_all(self) -> list[Project]:
        if self.fail_load:
            raise StorageError("disk unavailable")
        return await super().load_all()

    async def insert(self, fields: ProjectFields) -> Project:
        if self.failing:
            raise StorageError("quota exceeded")
        return await super().insert(fields)

    async def update(self, project_id: str, fields: ProjectFields) -> Project:
        if self.failing:
            raise StorageError("network down")
        return await super().update(project_id, fields)

    async def remove(self, project_id: str) -> None:
        if self.failing:
            raise StorageError("network down")
        await super().remove(project_id)


def project_input(
    name="Logo redesign",
    hours_worked="10",
    money_received="500",
    completion_date="2024-02-05",
) -> dict:
    return {
        "name": name,
        "hours_worked": hours_worked,
        "money_received": money_received,
        "completion_date": completion_date,
    }


def stored_project(
    project_id: str,
    hours: str = "10",
    money: str = "500",
    completion_date: datetime.date | None = datetime.date(2024, 2, 5),
    created_at: datetime.datetime = datetime.datetime(2024, 1, 1, tzinfo=UTC),
) -> Project:
    return Project(
        id=project_id,
        name=f"Project {project_id}",
        hours_worked=Decimal(hours),
        money_received=Decimal(money),
        completion_date=completion_date,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def adapter(clock):
    return FlakyAdapter(clock=clock)


@pytest.fixture
def store(adapter):
    store = ProjectStore(adapter)
    asyncio.run(store.load_all())
    return store
