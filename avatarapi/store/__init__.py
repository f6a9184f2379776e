"""Teacher configuration storage and services."""

from avatarapi.store.repository import ConfigStore
from avatarapi.store.service import active_catalog, save_teacher_settings

__all__ = [
    "ConfigStore",
    "active_catalog",
    "save_teacher_settings",
]
