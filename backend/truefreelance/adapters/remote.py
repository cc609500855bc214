"""
Remote row store — projects kept in a hosted table behind a REST API.

Speaks PostgREST conventions (the Supabase REST surface) via httpx:

  GET    /rest/v1/<table>?select=*&order=created_at.desc
  POST   /rest/v1/<table>                  Prefer: return=representation
  PATCH  /rest/v1/<table>?id=eq.<id>       Prefer: return=representation
  DELETE /rest/v1/<table>?id=eq.<id>       Prefer: return=representation

The server assigns id and created_at. If the table exposes a computed
hourly_rate column it is passed through and treated as authoritative.

Configuration:
  REMOTE_URL, REMOTE_API_KEY — project endpoint and anon/service key
  REMOTE_ACCESS_TOKEN        — user session token (row-level security)
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from truefreelance.core.errors import StorageError, StorageNotFoundError
from truefreelance.models.project import utcnow
from truefreelance.schemas.project import Project, ProjectFields

logger = logging.getLogger(__name__)

_REPRESENTATION = {"Prefer": "return=representation"}


class RemoteProjectAdapter:
    """PersistenceAdapter backed by a PostgREST table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str = "",
        table: str = "projects",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime.datetime] = utcnow,
    ) -> None:
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
            "Content-Type": "application/json",
        }
        self._path = f"/rest/v1/{table}"
        self._clock = clock
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    # ── Operations ──────────────────────────────────────────
    async def load_all(self) -> list[Project]:
        rows = await self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc"},
        )
        return [self._parse(row) for row in rows]

    async def insert(self, fields: ProjectFields) -> Project:
        rows = await self._request(
            "POST",
            json=fields.model_dump(mode="json"),
            headers=_REPRESENTATION,
        )
        if not rows:
            raise StorageError("Remote store did not return the new project.")
        return self._parse(rows[0])

    async def update(self, project_id: str, fields: ProjectFields) -> Project:
        body = fields.model_dump(mode="json")
        body["updated_at"] = self._clock().isoformat()

        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{project_id}"},
            json=body,
            headers=_REPRESENTATION,
        )
        if not rows:
            raise StorageNotFoundError(f"Project '{project_id}' is not stored.")
        return self._parse(rows[0])

    async def remove(self, project_id: str) -> None:
        rows = await self._request(
            "DELETE",
            params={"id": f"eq.{project_id}"},
            headers=_REPRESENTATION,
        )
        if not rows:
            raise StorageNotFoundError(f"Project '{project_id}' is not stored.")

    async def close(self) -> None:
        await self._client.aclose()

    # ── Helpers ─────────────────────────────────────────────
    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """Send one request and return the JSON row list."""
        try:
            response = await self._client.request(
                method,
                self._path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.error("Remote store unreachable: %s %s (%s)", method, self._path, exc)
            raise StorageError("Remote store is unreachable.") from exc

        if response.is_error:
            logger.error(
                "Remote store error: %s %s status=%d body=%s",
                method,
                self._path,
                response.status_code,
                response.text[:500],
            )
            raise StorageError(f"Remote store returned HTTP {response.status_code}.")

        # DELETE without a representation can come back empty
        if not response.content:
            return []

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Remote store sent a non-JSON body for %s %s", method, self._path)
            raise StorageError("Remote store sent an unreadable response.") from exc

        if not isinstance(data, list):
            raise StorageError("Remote store sent an unexpected response shape.")
        return data

    @staticmethod
    def _parse(row: dict[str, Any]) -> Project:
        try:
            return Project.model_validate(row)
        except ValidationError as exc:
            logger.error("Malformed project row from remote store: %s", exc)
            raise StorageError("Remote store sent a malformed project.") from exc
