"""Teacher settings operations on top of the configuration store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

import structlog

from avatarapi.canonical.teacher_key import log_ref
from avatarapi.models import ConfigurationRecord, Item
from avatarapi.store.repository import ConfigStore

logger = structlog.get_logger(__name__)

CatalogSource = Literal["default", "custom"]


async def save_teacher_settings(
    store: ConfigStore,
    teacher_id: str,
    items: list[Item],
    slot_rules: dict[str, list[str]] | None = None,
    record_updated_at: bool = True,
) -> ConfigurationRecord:
    """Replace a teacher's configuration. Nothing from the previous record is kept."""
    record = ConfigurationRecord(
        items=items,
        slot_rules=slot_rules,
        updated_at=datetime.now(timezone.utc) if record_updated_at else None,
    )
    await store.put(teacher_id, record)

    logger.info(
        "teacher_settings_saved",
        teacher=log_ref(teacher_id),
        items=len(items),
        custom_rules=slot_rules is not None,
    )
    return record


def active_catalog(store: ConfigStore, teacher_id: str) -> tuple[CatalogSource, list[Item]]:
    """Items the teacher's students can see, and where they came from."""
    record = store.get(teacher_id)
    if record is None or record.items is None:
        return "default", store.list_default_catalog()
    return "custom", record.items
