"""Shared FastAPI dependencies for the routers."""

from typing import Annotated

from fastapi import Depends, Request

from truefreelance.services.project_store import ProjectStore


def get_project_store(request: Request) -> ProjectStore:
    """The process-wide store built in the app lifespan."""
    return request.app.state.store


Store = Annotated[ProjectStore, Depends(get_project_store)]
