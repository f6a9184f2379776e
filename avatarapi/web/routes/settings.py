"""Teacher settings routes.

Routes:
- POST /api/save-settings - Replace a teacher's catalog and badge rules
- POST /api/load-settings - Return the stored record (or a default marker)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from avatarapi.config import AppConfig
from avatarapi.errors import InvalidInput
from avatarapi.store.repository import ConfigStore
from avatarapi.store.service import save_teacher_settings
from avatarapi.web.dependencies import get_app_config, get_store, resolve_teacher_id
from avatarapi.web.models import LoadSettingsRequest, SaveSettingsRequest, SaveSettingsResponse

router = APIRouter(prefix="/api", tags=["settings"])

NO_CUSTOM_SETTINGS_MESSAGE = "No custom settings, using default"


@router.post("/save-settings", response_model=SaveSettingsResponse)
async def save_settings(
    body: SaveSettingsRequest,
    store: ConfigStore = Depends(get_store),
    config: AppConfig = Depends(get_app_config),
):
    """Save a teacher's configuration, fully replacing any previous one."""
    if body.items is None:
        raise InvalidInput("Missing parameters")
    teacher_id = resolve_teacher_id(body.api_key, config)

    await save_teacher_settings(
        store,
        teacher_id,
        items=body.items,
        slot_rules=body.slot_rules,
        record_updated_at=config.store.record_updated_at,
    )
    return SaveSettingsResponse(success=True)


@router.post("/load-settings")
async def load_settings(
    body: LoadSettingsRequest,
    store: ConfigStore = Depends(get_store),
    config: AppConfig = Depends(get_app_config),
):
    """Return the teacher's stored record as saved."""
    teacher_id = resolve_teacher_id(body.api_key, config)

    record = store.get(teacher_id)
    if record is None:
        return {"items": [], "message": NO_CUSTOM_SETTINGS_MESSAGE}
    return record.to_document()
