"""
Durable local store — projects persisted through async SQLAlchemy.

SQLite (aiosqlite) by default; any async URL works, e.g. Postgres via
asyncpg. One session per operation; a failed commit is rolled back and
surfaced as StorageError so the caller's collection stays untouched.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from truefreelance.core.errors import StorageError, StorageNotFoundError
from truefreelance.models.project import ProjectRecord, generate_project_id, utcnow
from truefreelance.schemas.project import Project, ProjectFields

logger = logging.getLogger(__name__)


class SqlProjectAdapter:
    """PersistenceAdapter backed by the `projects` table."""

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        clock: Callable[[], datetime.datetime] = utcnow,
    ) -> None:
        self._engine = engine
        self._session_factory = session_factory or async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._clock = clock

    async def load_all(self) -> list[Project]:
        stmt = select(ProjectRecord).order_by(ProjectRecord.created_at.desc())
        try:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).scalars().all()
                return [Project.model_validate(row) for row in rows]
        except (SQLAlchemyError, ValidationError) as exc:
            logger.exception("Failed to load projects")
            raise StorageError("Could not load projects.") from exc

    async def insert(self, fields: ProjectFields) -> Project:
        now = self._clock()
        record = ProjectRecord(
            id=generate_project_id(),
            name=fields.name,
            hours_worked=fields.hours_worked,
            money_received=fields.money_received,
            completion_date=fields.completion_date,
            created_at=now,
            updated_at=now,
        )

        async with self._session_factory() as session:
            try:
                session.add(record)
                await session.commit()
                await session.refresh(record)
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("Failed to insert project")
                raise StorageError("Failed to store the project.") from exc

        return Project.model_validate(record)

    async def update(self, project_id: str, fields: ProjectFields) -> Project:
        async with self._session_factory() as session:
            try:
                record = await session.get(ProjectRecord, project_id)
                if record is None:
                    raise StorageNotFoundError(f"Project '{project_id}' is not stored.")

                record.name = fields.name
                record.hours_worked = fields.hours_worked
                record.money_received = fields.money_received
                record.completion_date = fields.completion_date
                record.updated_at = self._clock()

                await session.commit()
                await session.refresh(record)
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("Failed to update project %s", project_id)
                raise StorageError("Failed to update the project.") from exc

        return Project.model_validate(record)

    async def remove(self, project_id: str) -> None:
        async with self._session_factory() as session:
            try:
                record = await session.get(ProjectRecord, project_id)
                if record is None:
                    raise StorageNotFoundError(f"Project '{project_id}' is not stored.")

                await session.delete(record)
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("Failed to delete project %s", project_id)
                raise StorageError("Failed to delete the project.") from exc

    async def close(self) -> None:
        await self._engine.dispose()
