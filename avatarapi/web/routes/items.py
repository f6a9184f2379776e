"""Item catalog routes.

Routes:
- GET /api/items         - Catalog active for a teacher (custom or default)
- GET /api/default-items - Built-in catalog
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from avatarapi.config import AppConfig
from avatarapi.store.repository import ConfigStore
from avatarapi.store.service import active_catalog
from avatarapi.web.dependencies import get_app_config, get_store, resolve_teacher_id
from avatarapi.web.models import CatalogResponse

router = APIRouter(prefix="/api", tags=["items"])


@router.get("/items", response_model=CatalogResponse)
async def list_items(
    api_key: str | None = Query(default=None, alias="apiKey"),
    store: ConfigStore = Depends(get_store),
    config: AppConfig = Depends(get_app_config),
):
    """List the teacher's custom items, falling back to the default catalog."""
    teacher_id = resolve_teacher_id(api_key, config)
    source, items = active_catalog(store, teacher_id)
    return CatalogResponse(source=source, items=items)


@router.get("/default-items", response_model=CatalogResponse)
async def list_default_items(store: ConfigStore = Depends(get_store)):
    return CatalogResponse(source="default", items=store.list_default_catalog())
