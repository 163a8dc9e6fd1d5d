"""Record Store - Local JSON persistence for exercise records and settings.

This module handles all file I/O for exercise logging operations.
All I/O is contained here; business logic is in the core module.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from ..core.errors import DuplicateRecord, ReadError, WriteError
from ..core.models import AppSettings, ExerciseRecord, StoredRecord
from ..core.records import RecordMutator, remove_record, replace_record


logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".exebook"

_records_adapter = TypeAdapter(list[ExerciseRecord])
_stored_adapter = TypeAdapter(list[StoredRecord])


@dataclass
class StoreConfig:
    """Configuration for local storage.

    Attributes:
        data_dir: Directory holding the JSON documents
        records_filename: Name of the exercise records document
        settings_filename: Name of the settings document
    """

    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    records_filename: str = "exerciseRecords.json"
    settings_filename: str = "settings.json"

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build config from EXEBOOK_DATA_DIR (defaults to ~/.exebook)."""
        data_dir = os.environ.get("EXEBOOK_DATA_DIR")
        if data_dir:
            return cls(data_dir=Path(data_dir).expanduser())
        return cls()

    @property
    def records_path(self) -> Path:
        return Path(self.data_dir) / self.records_filename

    @property
    def settings_path(self) -> Path:
        return Path(self.data_dir) / self.settings_filename


def _read_document(path: Path) -> Any:
    """Read and decode a JSON document.

    Raises:
        ReadError: If the file is missing, unreadable or not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise ReadError(str(path), "document does not exist") from None
    except (OSError, ValueError) as e:
        raise ReadError(str(path), str(e)) from e


def _write_document(path: Path, data: Any) -> None:
    """Atomically replace a JSON document.

    The new content goes to a temp file in the same directory which is then
    renamed over the target, so a failed write leaves the old file intact.

    Raises:
        WriteError: If the document could not be written
    """
    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise WriteError(str(path), str(e)) from e


class RecordStore:
    """Whole-document store for exercise records.

    Document structure:
        [ { id, name, duration, calories, imageData?, timestamp, trainingDetails }, ... ]

    Every mutation loads the full list, changes it in memory and rewrites the
    whole file. Intended for a single writer; overlapping writers race and the
    last write wins.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        """Initialize record store.

        Args:
            config: Storage configuration
        """
        self.config = config or StoreConfig()

    @property
    def path(self) -> Path:
        return self.config.records_path

    def load(self) -> list[ExerciseRecord]:
        """Fetch all records in insertion order.

        Returns:
            List of records, empty if the document is missing or corrupt
        """
        logger.debug("Loading records from %s", self.path)
        try:
            data = _read_document(self.path)
            records = _stored_adapter.validate_python(data)
        except ReadError as e:
            logger.info("No records loaded: %s", e.reason)
            return []
        except ValidationError as e:
            logger.error("Failed to decode records: %s", str(e))
            return []

        logger.debug("Loaded %d records", len(records))
        return records

    def get(self, record_id: str) -> Optional[ExerciseRecord]:
        """Fetch a single record by id.

        Args:
            record_id: ID of the record

        Returns:
            ExerciseRecord if found, None otherwise
        """
        return next((r for r in self.load() if r.id == record_id), None)

    def save_all(self, records: list[ExerciseRecord]) -> None:
        """Replace the whole document with records.

        Raises:
            WriteError: If the document could not be written
        """
        logger.info("Saving %d records to %s", len(records), self.path)
        data = _records_adapter.dump_python(records, mode="json", by_alias=True, exclude_none=True)
        try:
            _write_document(self.path, data)
        except WriteError as e:
            logger.error("Failed to save records: %s", e.reason)
            raise

    def append(self, record: ExerciseRecord) -> None:
        """Add a record at the end of the collection.

        Args:
            record: The record to add

        Raises:
            DuplicateRecord: If a record with the same id is already stored
            WriteError: If the document could not be written
        """
        records = self.load()
        if any(r.id == record.id for r in records):
            logger.warning("Duplicate record id: %s", record.id)
            raise DuplicateRecord(str(self.path), f"record {record.id} already exists")

        records.append(record)
        self.save_all(records)

    def update(self, record_id: str, mutator: RecordMutator) -> bool:
        """Replace a record in place with mutator's output.

        Args:
            record_id: ID of the record to update
            mutator: Function producing the updated record

        Returns:
            True if a record was updated, False if the id was not found

        Raises:
            WriteError: If the document could not be written
        """
        records, replaced = replace_record(self.load(), record_id, mutator)
        if not replaced:
            logger.warning("Record not found: %s", record_id)
            return False

        self.save_all(records)
        return True

    def delete(self, record_id: str) -> bool:
        """Delete every record with the given id.

        Args:
            record_id: ID of the record to delete

        Returns:
            True if anything was removed, False if the id was not found

        Raises:
            WriteError: If the document could not be written
        """
        records, removed = remove_record(self.load(), record_id)
        if removed == 0:
            logger.warning("Record not found: %s", record_id)
            return False

        self.save_all(records)
        return True


class SettingsStore:
    """Stores the user's profile and app preferences as one JSON document."""

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()

    @property
    def path(self) -> Path:
        return self.config.settings_path

    def load(self) -> AppSettings:
        """Fetch settings, falling back to defaults if missing or corrupt."""
        logger.debug("Loading settings from %s", self.path)
        try:
            return AppSettings.model_validate(_read_document(self.path))
        except ReadError as e:
            logger.info("Using default settings: %s", e.reason)
        except ValidationError as e:
            logger.error("Failed to decode settings: %s", str(e))
        return AppSettings()

    def save(self, settings: AppSettings) -> AppSettings:
        """Save settings, stamping updated_at.

        Returns:
            The settings as written

        Raises:
            WriteError: If the document could not be written
        """
        logger.info("Saving settings to %s", self.path)
        settings = settings.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        try:
            _write_document(self.path, settings.model_dump(mode="json"))
        except WriteError as e:
            logger.error("Failed to save settings: %s", e.reason)
            raise
        return settings
