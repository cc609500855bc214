"""
Access token hashing utilities.

Security notes:
  • SHA-256 is used for token hashing — acceptable because tokens are
    high-entropy random strings (not low-entropy passwords).
  • Raw tokens use the tf_ prefix (convention, not security).
  • generate_access_token() returns the raw token exactly once — the caller
    must show it immediately. Only the hash goes into configuration.
"""

import hashlib
import hmac
import secrets


_TOKEN_PREFIX = "tf_"


def hash_token(raw_token: str) -> str:
    """Return the SHA-256 hex digest of a raw token."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def token_matches(raw_token: str, expected_hash: str) -> bool:
    """Constant-time comparison of a raw token against a stored hash."""
    return hmac.compare_digest(hash_token(raw_token), expected_hash.lower())


def generate_access_token() -> tuple[str, str]:
    """
    Generate a new access token.

    Returns:
        (raw_token, token_hash) — raw_token is shown once, token_hash is stored.
    """
    random_part = secrets.token_hex(32)  # 64 hex chars = 256 bits
    raw_token = f"{_TOKEN_PREFIX}{random_part}"
    return raw_token, hash_token(raw_token)
