"""
Dev bootstrap script — prepare the local store and an access token.

Usage:
    python -m scripts.bootstrap_dev

This will:
  1. Create the projects table in the local database (if missing)
  2. Generate an access token for the API session gate
  3. Print the raw token ONCE and the hash to put in .env

The raw token is shown exactly once — copy it immediately.
"""

import asyncio
import sys

# Ensure the project root is on the path
sys.path.insert(0, ".")

from truefreelance.auth.hashing import generate_access_token
from truefreelance.core.config import settings
from truefreelance.core.database import create_schema, engine
import truefreelance.models.project  # noqa: F401  (registers the table)


async def main() -> None:
    # ── Create schema ───────────────────────────────────────
    await create_schema()
    await engine.dispose()

    # ── Generate token ──────────────────────────────────────
    raw_token, token_hash = generate_access_token()

    # ── Print results ───────────────────────────────────────
    print()
    print("=" * 60)
    print("  Dev Bootstrap Complete")
    print("=" * 60)
    print()
    print(f"  Database:     {settings.DATABASE_URL}")
    print()
    print(f"  Access token: {raw_token}")
    print()
    print("  Add this line to .env to enable the session gate:")
    print(f"    ACCESS_TOKEN_HASH={token_hash}")
    print()
    print("  ⚠  Copy the token now — it will NEVER be shown again.")
    print("=" * 60)
    print()


if __name__ == "__main__":
    asyncio.run(main())
