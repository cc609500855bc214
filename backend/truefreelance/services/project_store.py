"""
ProjectStore — the authoritative in-memory collection of projects.

Lifecycle: create → load_all() → serve operations → discard.
One store per process, shared by reference (FastAPI app.state).

Write-through rules:
  • The collection changes only AFTER the adapter confirms a write, so it
    never holds an unconfirmed value.
  • A failed write (StorageError) leaves the collection exactly as it was.
  • Mutations run one at a time under a lock, so visible effects follow
    the order the calls were issued.

Ordering: newest-created first. add() prepends; update() keeps the
record at its position.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from truefreelance.adapters.base import PersistenceAdapter
from truefreelance.core.errors import ProjectNotFoundError, StorageError
from truefreelance.schemas.project import Project, ProjectFields
from truefreelance.services.rates import compute_hourly_rate
from truefreelance.services.validation import validate_project_fields

logger = logging.getLogger(__name__)

ProjectInput = Mapping[str, Any] | ProjectFields


class ProjectStore:
    """CRUD over projects with validation and derived hourly rate."""

    def __init__(self, adapter: PersistenceAdapter) -> None:
        self._adapter = adapter
        self._projects: list[Project] = []
        self._lock = asyncio.Lock()

    @property
    def adapter(self) -> PersistenceAdapter:
        return self._adapter

    @property
    def projects(self) -> tuple[Project, ...]:
        """Snapshot of the collection, newest first."""
        return tuple(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    # ── Read ────────────────────────────────────────────────
    def get_by_id(self, project_id: str) -> Project | None:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def confirmation_prompt(self, project_id: str) -> str:
        """Message to show before calling remove()."""
        project = self.get_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return f'Are you sure you want to delete "{project.name}"?'

    # ── Load ────────────────────────────────────────────────
    async def load_all(self) -> list[Project]:
        """
        Replace the collection with everything the adapter holds.

        On StorageError the collection is emptied (never left partial)
        and the error is re-raised.
        """
        async with self._lock:
            try:
                stored = await self._adapter.load_all()
            except StorageError:
                self._projects = []
                raise

            projects = [self._with_rate(project) for project in stored]
            projects.sort(key=lambda project: project.created_at, reverse=True)
            self._projects = projects

        logger.info("Loaded %d projects", len(projects))
        return list(projects)

    # ── Write ───────────────────────────────────────────────
    async def add(self, data: ProjectInput) -> Project:
        """
        Validate, persist, then prepend.

        Raises:
            ProjectValidationError: input rejected; nothing persisted.
            StorageError: adapter failed; collection unchanged.
        """
        fields = validate_project_fields(data)

        async with self._lock:
            stored = await self._adapter.insert(fields)
            project = self._with_rate(stored)
            self._projects.insert(0, project)

        logger.info("Added project %s (%r)", project.id, project.name)
        return project

    async def update(self, project_id: str, data: ProjectInput) -> Project:
        """
        Replace all four editable fields of an existing project.

        Raises:
            ProjectNotFoundError: id not in the collection.
            ProjectValidationError: input rejected; nothing persisted.
            StorageError: adapter failed; collection unchanged.
        """
        if self.get_by_id(project_id) is None:
            raise ProjectNotFoundError(project_id)

        fields = validate_project_fields(data)

        async with self._lock:
            # Re-check: a remove may have completed while we waited.
            index = self._index_of(project_id)
            stored = await self._adapter.update(project_id, fields)
            project = self._with_rate(stored)
            self._projects[index] = project

        logger.info("Updated project %s", project_id)
        return project

    async def remove(self, project_id: str) -> None:
        """
        Delete a project. Call only after the user confirmed.

        Raises:
            ProjectNotFoundError: id not in the collection.
            StorageError: adapter failed; collection unchanged.
        """
        async with self._lock:
            index = self._index_of(project_id)
            await self._adapter.remove(project_id)
            del self._projects[index]

        logger.info("Removed project %s", project_id)

    # ── Helpers ─────────────────────────────────────────────
    def _index_of(self, project_id: str) -> int:
        for index, project in enumerate(self._projects):
            if project.id == project_id:
                return index
        raise ProjectNotFoundError(project_id)

    @staticmethod
    def _with_rate(project: Project) -> Project:
        """Fill hourly_rate locally unless the store already supplied one."""
        if project.hourly_rate is not None:
            return project
        rate = compute_hourly_rate(project.hours_worked, project.money_received)
        return project.model_copy(update={"hourly_rate": rate})
