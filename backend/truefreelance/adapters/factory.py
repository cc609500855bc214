"""Pick the persistence adapter named by STORAGE_BACKEND."""

from __future__ import annotations

import logging

from truefreelance.adapters.base import PersistenceAdapter
from truefreelance.adapters.memory import InMemoryProjectAdapter
from truefreelance.adapters.remote import RemoteProjectAdapter
from truefreelance.adapters.sql import SqlProjectAdapter
from truefreelance.core.config import Settings
from truefreelance.core.database import async_session_factory, engine

logger = logging.getLogger(__name__)


def build_adapter(config: Settings) -> PersistenceAdapter:
    """
    Construct the adapter for the configured backend.

    Raises:
        ValueError: unknown backend, or remote backend without REMOTE_URL.
    """
    backend = config.STORAGE_BACKEND

    if backend == "local":
        logger.info("Using local SQL store")
        return SqlProjectAdapter(engine, session_factory=async_session_factory)

    if backend == "remote":
        if not config.REMOTE_URL:
            raise ValueError("STORAGE_BACKEND=remote requires REMOTE_URL")
        logger.info("Using remote row store at %s", config.REMOTE_URL)
        return RemoteProjectAdapter(
            base_url=config.REMOTE_URL,
            api_key=config.REMOTE_API_KEY,
            access_token=config.REMOTE_ACCESS_TOKEN,
            table=config.REMOTE_TABLE,
            timeout=config.REMOTE_TIMEOUT_SECONDS,
        )

    if backend == "memory":
        logger.warning("Using in-memory store — data is lost on restart")
        return InMemoryProjectAdapter()

    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'")
