import json
import os
from abc import ABC, abstractmethod
from typing import List

from pydantic import ValidationError

from app.core.logger import logger
from app.models.booking import Booking


class StorageError(Exception):
    """Raised when the bookings file cannot be written (or, in strict mode, read)."""


class RecordStore(ABC):
    """
    Whole-collection storage for bookings.
    Implementations read and write the full ordered list at once.
    """

    @abstractmethod
    def ensure_ready(self) -> bool: ...

    @abstractmethod
    def read_all(self) -> List[Booking]: ...

    @abstractmethod
    def write_all(self, records: List[Booking]) -> None: ...


class JsonFileRecordStore(RecordStore):
    """
    Keeps every booking in one human-readable JSON array on disk.
    No locking and no atomic replace: concurrent writers race and the last one wins.
    """

    def __init__(self, path: str, strict: bool = False):
        self.path = path
        self.strict = strict

    def ensure_ready(self) -> bool:
        """
        Creates the bookings file as an empty array if it does not exist.
        Errors are logged and the app keeps running, unless strict mode is on.
        """
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            if not os.path.exists(self.path):
                with open(self.path, 'w', encoding='utf-8') as f:
                    json.dump([], f)
                logger.info(f"🆕 Created bookings file: {self.path}")
            elif self.strict:
                self._load()
            logger.info(f"✅ Bookings store ready: {self.path}")
            return True
        except StorageError:
            raise
        except (OSError, ValueError, ValidationError) as e:
            if self.strict:
                raise StorageError(f"Bookings file {self.path} is not usable: {e}") from e
            logger.error(f"❌ Failed to initialize bookings file {self.path}: {e}")
            return False

    def _load(self) -> List[Booking]:
        with open(self.path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
        bookings = []
        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                logger.warning(f"⚠️ Skipping non-object entry #{index} in {self.path}: {record!r}")
                continue
            bookings.append(Booking.model_validate(record))
        return bookings

    def read_all(self) -> List[Booking]:
        """
        Returns all bookings in insertion order.
        Falls back to an empty list if the file is missing or unreadable.
        """
        try:
            return self._load()
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"❌ Could not read bookings from {self.path}, using empty list: {e}")
            return []

    def write_all(self, records: List[Booking]) -> None:
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump([r.to_record() for r in records], f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Could not write bookings to {self.path}: {e}")
            raise StorageError(f"Could not write bookings file: {e}") from e
