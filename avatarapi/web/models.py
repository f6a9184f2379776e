"""Request/response models for the avatar API.

Wire names are camelCase (`apiKey`, `slotRules`, `unlockedSlots`).

Usage:
    from avatarapi.web.models import SaveSettingsRequest

    @router.post("/api/save-settings")
    async def save_settings(body: SaveSettingsRequest):
        ...
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from avatarapi.models import Item


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Teacher Settings Models
# ============================================================================


class SaveSettingsRequest(_CamelModel):
    """Replace a teacher's item catalog and optional badge rules.

    Used by: POST /api/save-settings
    """

    api_key: Optional[str] = None
    items: Optional[List[Item]] = None
    slot_rules: Optional[Dict[str, List[str]]] = None


class SaveSettingsResponse(_CamelModel):
    """Used by: POST /api/save-settings"""

    success: bool = True


class LoadSettingsRequest(_CamelModel):
    """Used by: POST /api/load-settings"""

    api_key: Optional[str] = None


# ============================================================================
# Catalog & Slot Models
# ============================================================================


class CatalogResponse(_CamelModel):
    """Items visible to a teacher's students.

    Used by: GET /api/items, GET /api/default-items
    """

    source: Literal["default", "custom"]
    items: List[Item]


class UnlockedSlotsResponse(_CamelModel):
    """Used by: GET /api/unlocked-slots"""

    badges: List[str]
    unlocked_slots: List[str]


class SlotRulesResponse(_CamelModel):
    """Used by: GET /api/slot-rules"""

    rules: Dict[str, List[str]]
