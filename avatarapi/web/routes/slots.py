"""Badge -> slot routes.

Routes:
- GET /api/unlocked-slots - Slots unlocked by a comma-separated badge list
- GET /api/slot-rules     - Default badge -> slot table
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query

from avatarapi.canonical.teacher_key import log_ref
from avatarapi.config import AppConfig
from avatarapi.slots.resolver import (
    default_rules_document,
    parse_badge_ids,
    resolve_slots,
    select_rules,
)
from avatarapi.store.repository import ConfigStore
from avatarapi.web.dependencies import get_app_config, get_store, resolve_teacher_id
from avatarapi.web.models import SlotRulesResponse, UnlockedSlotsResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["slots"])


@router.get("/unlocked-slots", response_model=UnlockedSlotsResponse)
async def unlocked_slots(
    api_key: str | None = Query(default=None, alias="apiKey"),
    badges: str | None = Query(default=None),
    store: ConfigStore = Depends(get_store),
    config: AppConfig = Depends(get_app_config),
):
    """Resolve a student's badges against the teacher's rules (or the defaults).

    Unknown badge ids are ignored.
    """
    teacher_id = resolve_teacher_id(api_key, config)
    badge_ids = parse_badge_ids(badges)

    rules, source = select_rules(store.get(teacher_id))
    slots = resolve_slots(badge_ids, rules)

    logger.debug(
        "slots_resolved",
        teacher=log_ref(teacher_id),
        rules=source,
        badges=len(badge_ids),
        unlocked=len(slots),
    )
    return UnlockedSlotsResponse(badges=badge_ids, unlocked_slots=slots)


@router.get("/slot-rules", response_model=SlotRulesResponse)
async def slot_rules():
    """Default badge -> slot table."""
    return SlotRulesResponse(rules=default_rules_document())
