"""Shared dependencies for avatar API routes.

The store and configuration are created once in `create_app()` and kept on
`app.state`; handlers receive them through FastAPI's Depends() system.

Usage:
    from fastapi import Depends
    from avatarapi.web.dependencies import get_store

    @router.get("/api/items")
    async def items(store: ConfigStore = Depends(get_store)):
        ...
"""

from __future__ import annotations

from fastapi import Request

from avatarapi.canonical.teacher_key import normalize_secret
from avatarapi.config import AppConfig
from avatarapi.store.repository import ConfigStore


def get_store(request: Request) -> ConfigStore:
    """Configuration store owned by the running app."""
    return request.app.state.store


def get_app_config(request: Request) -> AppConfig:
    """Configuration the app was created with."""
    return request.app.state.config


def resolve_teacher_id(api_key: str | None, config: AppConfig) -> str:
    """Map the caller's API key to its store key.

    Raises:
        InvalidInput: If the key is missing or blank
    """
    return normalize_secret(api_key, config.store.key_strategy)
