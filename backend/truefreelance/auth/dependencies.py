"""
FastAPI dependency for the session gate.

Flow:
  1. If ACCESS_TOKEN_HASH is empty, the gate is open (local use).
  2. Extract Bearer token from Authorization header
  3. Hash the token (SHA-256) and compare with ACCESS_TOKEN_HASH

Security:
  • Generic 401 for ALL failure modes (missing, malformed, wrong)
  • Raw tokens are NEVER logged
"""

from __future__ import annotations

from fastapi import Header, HTTPException, status

from truefreelance.auth.hashing import token_matches
from truefreelance.core.config import settings

# Generic 401 — same message for all auth failures to avoid leaking info
_AUTH_FAILED = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or missing access token.",
    headers={"WWW-Authenticate": "Bearer"},
)


async def require_session(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> None:
    """
    FastAPI dependency — rejects requests without a valid Bearer token.

    Usage in routers:
        router = APIRouter(dependencies=[Depends(require_session)])
    """
    expected_hash = settings.ACCESS_TOKEN_HASH
    if not expected_hash:
        return

    if not authorization:
        raise _AUTH_FAILED

    parts = authorization.split(" ", maxsplit=1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _AUTH_FAILED

    if not token_matches(parts[1], expected_hash):
        raise _AUTH_FAILED
