"""Startup validation for the avatar API.

Fail fast & loud: if the data directory cannot be used or the backing
document cannot be loaded, the server must not start accepting requests.
"""

from __future__ import annotations

import logging
import os

from avatarapi.canonical.teacher_key import KeyStrategy
from avatarapi.config import AppConfig
from avatarapi.errors import StoreCorruptError
from avatarapi.store.repository import ConfigStore

logger = logging.getLogger(__name__)


class StartupValidationError(Exception):
    """Raised when startup validation fails."""
    pass


def validate_data_directory(config: AppConfig) -> None:
    """Create the data directory on demand and check it is writable.

    Raises:
        StartupValidationError: If the directory cannot be created or written
    """
    data_dir = config.store.data_dir
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StartupValidationError(
            f"Cannot create data directory {data_dir}: {e}. "
            "Set DATA_DIR to a writable location."
        ) from e

    if not os.access(data_dir, os.W_OK):
        raise StartupValidationError(
            f"Data directory {data_dir} is not writable. "
            "Set DATA_DIR to a writable location."
        )

    logger.info(f"✓ Data directory OK ({data_dir})")


def validate_store(store: ConfigStore) -> None:
    """Load the backing document.

    Raises:
        StartupValidationError: If the document is corrupt or unreadable
    """
    try:
        store.load()
    except StoreCorruptError as e:
        raise StartupValidationError(
            f"Configuration store is corrupt: {e}. "
            "Restore teachers.json from backup or move it aside to start empty."
        ) from e
    except OSError as e:
        raise StartupValidationError(f"Cannot initialize configuration store: {e}") from e

    logger.info(f"✓ Configuration store loaded ({len(store)} teachers)")


def validate_key_strategy(config: AppConfig) -> None:
    """Warn when raw secrets will be written to disk (warning only)."""
    if config.store.key_strategy is KeyStrategy.PASSTHROUGH:
        logger.warning(
            "⚠ TEACHER_KEY_STRATEGY=passthrough: raw API keys are stored as-is in "
            f"{config.store.path}. Use 'digest' unless legacy data requires it."
        )
    else:
        logger.info("✓ Teacher keys stored as SHA-256 digests")


def run_all_validations(config: AppConfig, store: ConfigStore) -> None:
    """Run all startup validations.

    Raises:
        StartupValidationError: If any critical validation fails
    """
    logger.info("Running startup validations...")

    validate_data_directory(config)
    validate_key_strategy(config)
    validate_store(store)

    logger.info("✓ All startup validations passed")
