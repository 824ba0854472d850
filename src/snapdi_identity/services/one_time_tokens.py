"""Opaque one-time tokens (refresh, verification, password reset).

Raw tokens are handed to the user exactly once; only their SHA-256 digest
is stored, so a leaked database row cannot be replayed.
"""

import hashlib
import secrets

TOKEN_BYTES = 32


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()
