"""Teacher identifier derivation.

Converts the opaque secret a teacher sends ("API key") into the key used in
the configuration store. Two strategies exist and are never combined:

- digest: SHA-256 of the secret as 64 lowercase hex chars. The raw secret is
  never written to disk.
- passthrough: the secret itself is the key. Simpler, but the raw secret is
  persisted in teachers.json and anyone who can read the file can reuse it.

The secret is never verified against anything; it is only a lookup handle.
"""

from __future__ import annotations

import hashlib
from enum import Enum

from avatarapi.errors import InvalidInput


class KeyStrategy(str, Enum):
    """How a teacher secret becomes a storage key."""

    DIGEST = "digest"
    PASSTHROUGH = "passthrough"


def normalize_secret(secret: object, strategy: KeyStrategy = KeyStrategy.DIGEST) -> str:
    """Derive the deterministic teacher identifier for a secret.

    Args:
        secret: Caller-supplied API key
        strategy: Digest or passthrough

    Returns:
        Teacher identifier used as the store key

    Raises:
        InvalidInput: If the secret is missing, not a string, or blank
    """
    if not isinstance(secret, str) or not secret.strip():
        raise InvalidInput("Missing apiKey")

    if strategy is KeyStrategy.PASSTHROUGH:
        return secret

    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def log_ref(identifier: str) -> str:
    """Short reference to an identifier that is safe to put in log lines."""
    return hashlib.sha256(identifier.encode("utf-8")).hexdigest()[:12]
