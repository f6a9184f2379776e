"""JSON-file configuration store for teacher settings.

The whole store is one JSON object (teacher identifier -> record) held in
memory and rewritten to disk after every successful put. Writes are
serialized by a single store-wide lock; reads never block.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from avatarapi.canonical.teacher_key import log_ref
from avatarapi.errors import PersistenceFailure, StoreCorruptError
from avatarapi.models import ConfigurationRecord, Item, default_catalog

logger = structlog.get_logger(__name__)


class ConfigStore:
    """Teacher identifier -> ConfigurationRecord map backed by one JSON file.

    Example:
        >>> store = ConfigStore(Path("data/teachers.json"))
        >>> store.load()
        >>> await store.put(teacher_id, record)
        >>> store.get(teacher_id) == record
        True
    """

    def __init__(self, path: Path | str):
        """Initialize store.

        Args:
            path: Backing JSON document. Its directory is created on load.
        """
        self.path = Path(path)
        self._records: dict[str, ConfigurationRecord] = {}
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Read the backing document into memory.

        A missing file is an empty store; the file is created as `{}`.

        Raises:
            StoreCorruptError: If the file is not a JSON object of valid records
            OSError: If the data directory cannot be created or written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if not self.path.exists():
            self._write_document({})
            self._records = {}
            self._loaded = True
            logger.info("store_initialized", path=str(self.path))
            return

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreCorruptError(
                f"{self.path} is not valid JSON (line {e.lineno}, column {e.colno})"
            ) from e

        if not isinstance(document, dict):
            raise StoreCorruptError(
                f"{self.path} must contain a JSON object, found {type(document).__name__}"
            )

        records: dict[str, ConfigurationRecord] = {}
        for identifier, raw in document.items():
            try:
                records[identifier] = ConfigurationRecord.model_validate(raw)
            except ValidationError as e:
                # Never echo the key itself: in passthrough mode it is the secret
                raise StoreCorruptError(
                    f"{self.path} holds an invalid record (ref {log_ref(identifier)}): "
                    f"{e.error_count()} validation error(s)"
                ) from e

        self._records = records
        self._loaded = True
        logger.info("store_loaded", path=str(self.path), teachers=len(records))

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def get(self, identifier: str) -> ConfigurationRecord | None:
        """Return the stored record, or None when the teacher has none."""
        self._ensure_loaded()
        record = self._records.get(identifier)
        if record is None:
            return None
        return record.model_copy(deep=True)

    async def put(self, identifier: str, record: ConfigurationRecord) -> None:
        """Replace the teacher's record and persist the whole store.

        The in-memory state only changes once the file has been replaced, so
        a failed write leaves both disk and memory as they were.

        Raises:
            PersistenceFailure: If the backing document could not be written
        """
        async with self._lock:
            self._ensure_loaded()

            records = dict(self._records)
            records[identifier] = record.model_copy(deep=True)
            document = {key: value.to_document() for key, value in records.items()}

            try:
                await asyncio.to_thread(self._write_document, document)
            except (OSError, ValueError) as e:
                logger.error(
                    "store_write_failed",
                    path=str(self.path),
                    teacher=log_ref(identifier),
                    error=str(e),
                )
                raise PersistenceFailure(f"Failed to write {self.path}: {e}") from e

            self._records = records

    def list_default_catalog(self) -> list[Item]:
        """Built-in catalog used for teachers without custom items."""
        return default_catalog()

    def identifiers(self) -> list[str]:
        self._ensure_loaded()
        return list(self._records)

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        self._ensure_loaded()
        return identifier in self._records

    def _write_document(self, document: dict[str, Any]) -> None:
        """Write to a temp file next to the target, then atomically replace it."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2, allow_nan=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise
