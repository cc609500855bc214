"""
Projects router — CRUD over the freelance project collection.

Endpoints:
  GET    /projects                       — all projects, newest first
  GET    /projects/{id}                  — one project
  POST   /projects                       — add (hourly_rate derived server-side)
  PUT    /projects/{id}                  — full replace of the editable fields
  GET    /projects/{id}/confirmation     — prompt to show before deleting
  DELETE /projects/{id}?confirm=true     — delete after confirmation

Errors:
  422 — field-level validation issues, all of them at once
  404 — unknown project id
  503 — the persistence backend failed; nothing changed
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import JSONResponse

from truefreelance.auth.dependencies import require_session
from truefreelance.core.errors import (
    ProjectNotFoundError,
    ProjectValidationError,
    StorageError,
)
from truefreelance.routers.deps import Store
from truefreelance.schemas.project import (
    DeleteConfirmationOut,
    Project,
    ProjectPayload,
    ValidationIssueOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"], dependencies=[Depends(require_session)])


def _validation_failed(exc: ProjectValidationError) -> HTTPException:
    issues = [
        ValidationIssueOut(
            kind=issue.kind.value,
            field=issue.field,
            message=issue.message,
        ).model_dump()
        for issue in exc.issues
    ]
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"errors": issues},
    )


def _not_found(exc: ProjectNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Project '{exc.project_id}' not found.",
    )


def _storage_failed(action: str) -> HTTPException:
    logger.warning("Could not %s project: storage unavailable", action)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Failed to {action} the project. Please try again.",
    )


# ── Read ────────────────────────────────────────────────────
@router.get(
    "",
    response_model=list[Project],
    summary="List all projects",
)
async def list_projects(store: Store) -> list[Project]:
    return list(store.projects)


@router.get(
    "/{project_id}",
    response_model=Project,
    summary="Get one project",
)
async def get_project(project_id: str, store: Store) -> Project:
    project = store.get_by_id(project_id)
    if project is None:
        raise _not_found(ProjectNotFoundError(project_id))
    return project


# ── Create / update ─────────────────────────────────────────
@router.post(
    "",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    summary="Add a project",
    description=(
        "Validates every field, persists the project, and returns it "
        "with id, timestamps, and the derived hourly_rate."
    ),
)
async def create_project(payload: ProjectPayload, store: Store) -> Project:
    try:
        return await store.add(payload.model_dump())
    except ProjectValidationError as exc:
        raise _validation_failed(exc) from exc
    except StorageError as exc:
        raise _storage_failed("store") from exc


@router.put(
    "/{project_id}",
    response_model=Project,
    summary="Replace a project's editable fields",
)
async def update_project(
    project_id: str,
    payload: ProjectPayload,
    store: Store,
) -> Project:
    try:
        return await store.update(project_id, payload.model_dump())
    except ProjectNotFoundError as exc:
        raise _not_found(exc) from exc
    except ProjectValidationError as exc:
        raise _validation_failed(exc) from exc
    except StorageError as exc:
        raise _storage_failed("update") from exc


# ── Delete (two-step) ───────────────────────────────────────
@router.get(
    "/{project_id}/confirmation",
    response_model=DeleteConfirmationOut,
    summary="Prompt to show before deleting",
)
async def delete_confirmation(project_id: str, store: Store) -> DeleteConfirmationOut:
    try:
        prompt = store.confirmation_prompt(project_id)
    except ProjectNotFoundError as exc:
        raise _not_found(exc) from exc
    return DeleteConfirmationOut(project_id=project_id, prompt=prompt)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project after confirmation",
    description=(
        "Only deletes when confirm=true. Without it the call is a no-op "
        "and answers 200 with deleted=false."
    ),
    response_model=None,
)
async def delete_project(
    project_id: str,
    store: Store,
    confirm: bool = Query(default=False, description="User confirmed the deletion"),
) -> Response:
    if not confirm:
        # Declined confirmation is a normal abort, not an error.
        return JSONResponse({"deleted": False}, status_code=status.HTTP_200_OK)

    try:
        await store.remove(project_id)
    except ProjectNotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise _storage_failed("delete") from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
