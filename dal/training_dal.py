"""JSON-file data access layer for training examples.

The whole document is read and rewritten on every mutation. Writes land in a
sibling temp file that is atomically swapped into place, so a reader never sees
a half-written array. There is no cross-request locking: two concurrent
mutations each rewrite the full list and the last one to finish wins.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple

import aiofiles
import aiofiles.os

from models.training_record import TrainingRecord
from utils.errors import StorageReadError, StorageWriteError, ValidationError

LOGGER = logging.getLogger(__name__)

MAX_RECORDS = 100


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TrainingStore:
    """Bounded, newest-first collection of `TrainingRecord` persisted as one JSON array."""

    def __init__(self, path: Path | str, max_records: int = MAX_RECORDS) -> None:
        """
        Args:
            path: Location of the JSON document holding the record array.
            max_records: Retention bound; older records past it are evicted on insert.
        """
        self.path = Path(path)
        self.max_records = max_records

    async def initialize(self) -> None:
        """Create the parent directory and an empty document if none exists yet."""
        if await aiofiles.os.path.exists(self.path):
            return
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
        except OSError as exc:
            raise StorageWriteError(f"Failed to create data directory {self.path.parent}") from exc
        await self._write([])
        LOGGER.info("Initialized empty training store at %s", self.path)

    async def list(self) -> List[TrainingRecord]:
        """Return all records, newest first.

        Entries that cannot be decoded are skipped with a warning.

        Raises:
            StorageReadError: If the document is missing, unreadable, or not a JSON array.
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as fh:
                raw = await fh.read()
        except OSError as exc:
            raise StorageReadError(f"Unable to read {self.path}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageReadError(f"Malformed JSON in {self.path}") from exc

        if not isinstance(data, list):
            raise StorageReadError(f"Expected a JSON array in {self.path}")

        records: List[TrainingRecord] = []
        for position, item in enumerate(data):
            try:
                records.append(TrainingRecord.from_dict(item))
            except (KeyError, TypeError, AttributeError) as exc:
                LOGGER.warning(
                    "Skipping invalid training record at index %d in %s: %r", position, self.path, exc
                )
        return records

    async def list_or_empty(self) -> List[TrainingRecord]:
        """Return all records, treating an unreadable document as an empty store."""
        try:
            return await self.list()
        except StorageReadError as exc:
            LOGGER.warning("Training data unavailable, treating as empty: %s", exc)
            return []

    async def insert(self, data: Dict[str, Any]) -> Tuple[TrainingRecord, int]:
        """Validate and prepend a record, evicting the oldest past the bound.

        Args:
            data: Client payload with `image` and `classification` plus optional
                `mimeType`, `notes`, `annotations`, `timestamp` and `id`.

        Returns:
            A tuple of `(record, total_entries)` after the write.

        Raises:
            ValidationError: If `image` or `classification` is missing or empty.
            StorageWriteError: If the document could not be persisted.
        """
        image = data.get("image")
        classification = data.get("classification")
        if not image or not classification:
            raise ValidationError("Image and classification are required")

        records = await self.list_or_empty()

        record_id = data.get("id")
        if record_id and any(r.id == str(record_id) for r in records):
            LOGGER.info("Training id %s already stored, assigning a fresh id", record_id)
            record_id = None

        record = TrainingRecord(
            id=str(record_id or uuid.uuid4().hex),
            image=image,
            classification=classification,
            mime_type=data.get("mimeType") or "image/jpeg",
            notes=data.get("notes") or "",
            annotations=list(data.get("annotations") or []),
            timestamp=data.get("timestamp") or utc_timestamp(),
        )

        records.insert(0, record)
        if len(records) > self.max_records:
            LOGGER.debug("Evicting %d training record(s)", len(records) - self.max_records)
            records = records[: self.max_records]

        await self._write([r.to_dict() for r in records])
        return record, len(records)

    async def delete(self, record_id: str) -> int:
        """Remove the record with `record_id` if present and return the remaining count."""
        records = await self.list_or_empty()
        remaining = [r for r in records if r.id != record_id]
        await self._write([r.to_dict() for r in remaining])
        return len(remaining)

    async def _write(self, items: List[Dict[str, Any]]) -> None:
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as fh:
                await fh.write(json.dumps(items, indent=2))
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as exc:
            LOGGER.error("Failed to write training data to %s: %s", self.path, exc)
            try:
                await aiofiles.os.remove(tmp_path)
            except OSError:
                pass
            raise StorageWriteError(f"Unable to write {self.path}") from exc
