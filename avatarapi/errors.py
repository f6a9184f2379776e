"""Error taxonomy for the avatar reward API.

Request handlers translate these into HTTP responses:
- InvalidInput        -> 400
- PersistenceFailure  -> 500
- StoreCorruptError   -> fatal at startup

A missing teacher configuration is not an error; the store returns None.
"""

from __future__ import annotations


class AvatarAPIError(Exception):
    """Base class for all avatar API errors."""


class InvalidInput(AvatarAPIError):
    """A required field is missing or has the wrong shape."""


class PersistenceFailure(AvatarAPIError):
    """Writing the backing document failed. The previous state is kept."""


class StoreCorruptError(AvatarAPIError):
    """The backing document exists but cannot be parsed as a store."""
