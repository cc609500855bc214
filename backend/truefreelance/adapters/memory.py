"""
In-memory store — nothing survives a restart.

Used for STORAGE_BACKEND=memory and as the swap-in adapter in tests.
Records are kept in insertion order; ordering is ProjectStore's job.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Iterable

from truefreelance.core.errors import StorageNotFoundError
from truefreelance.models.project import generate_project_id, utcnow
from truefreelance.schemas.project import Project, ProjectFields


class InMemoryProjectAdapter:
    """PersistenceAdapter backed by a dict."""

    def __init__(
        self,
        initial: Iterable[Project] = (),
        clock: Callable[[], datetime.datetime] = utcnow,
        id_factory: Callable[[], str] = generate_project_id,
    ) -> None:
        self._rows: dict[str, Project] = {project.id: project for project in initial}
        self._clock = clock
        self._id_factory = id_factory

    async def load_all(self) -> list[Project]:
        return list(self._rows.values())

    async def insert(self, fields: ProjectFields) -> Project:
        now = self._clock()
        project = Project(
            id=self._id_factory(),
            created_at=now,
            updated_at=now,
            **fields.model_dump(),
        )
        self._rows[project.id] = project
        return project

    async def update(self, project_id: str, fields: ProjectFields) -> Project:
        current = self._rows.get(project_id)
        if current is None:
            raise StorageNotFoundError(f"Project '{project_id}' is not stored.")

        # Rates are not computed here; drop any carried-over value.
        project = current.model_copy(
            update={
                **fields.model_dump(),
                "hourly_rate": None,
                "updated_at": self._clock(),
            },
        )
        self._rows[project_id] = project
        return project

    async def remove(self, project_id: str) -> None:
        if self._rows.pop(project_id, None) is None:
            raise StorageNotFoundError(f"Project '{project_id}' is not stored.")

    async def close(self) -> None:
        return None
