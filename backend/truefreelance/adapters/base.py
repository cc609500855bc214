"""
Persistence adapter interface.

ProjectStore depends only on this Protocol, never on a concrete backend.
Every method either returns the confirmed state or raises StorageError.
"""

from __future__ import annotations

from typing import Protocol

from truefreelance.schemas.project import Project, ProjectFields


class PersistenceAdapter(Protocol):
    """Durable storage boundary for projects."""

    async def load_all(self) -> list[Project]:
        """Return every stored project."""
        ...

    async def insert(self, fields: ProjectFields) -> Project:
        """Store a new project and return it with id and timestamps."""
        ...

    async def update(self, project_id: str, fields: ProjectFields) -> Project:
        """Replace the editable fields. Raises StorageNotFoundError if absent."""
        ...

    async def remove(self, project_id: str) -> None:
        """Delete a project. Raises StorageNotFoundError if absent."""
        ...

    async def close(self) -> None:
        """Release connections held by the adapter."""
        ...
