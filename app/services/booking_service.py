from typing import Optional, List, Mapping, Any
from collections import Counter
from datetime import datetime, timezone, timedelta
import uuid

from starlette.concurrency import run_in_threadpool

from app.models.booking import Booking, BookingStats, BookingStatus, SERVER_FIELDS
from app.services.record_store import RecordStore
from app.core.logger import logger

RECENT_LIMIT = 10
UNKNOWN_KEY = "unknown"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class BookingNotFoundError(Exception):
    def __init__(self, booking_id: str):
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


def utc_timestamp() -> str:
    """ISO 8601 in UTC with microseconds, e.g. 2026-10-16T09:30:00.123456Z"""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def later_timestamp(previous: Any) -> str:
    """
    Current time, but always after `previous` so updatedAt strictly increases
    even when the clock has not ticked since the last write.
    """
    now = utc_timestamp()
    if not isinstance(previous, str) or now > previous:
        return now
    try:
        prior = datetime.strptime(previous, TIMESTAMP_FORMAT)
    except ValueError:
        return now
    return (prior + timedelta(microseconds=1)).strftime(TIMESTAMP_FORMAT)


def new_booking_id() -> str:
    return uuid.uuid4().hex


class BookingService:
    """
    Booking operations over the whole collection.
    Every call reads the full list from the store and, when it changes something,
    writes the full list back. Nothing is cached between calls.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def _read(self) -> List[Booking]:
        return await run_in_threadpool(self.store.read_all)

    async def _write(self, bookings: List[Booking]) -> None:
        await run_in_threadpool(self.store.write_all, bookings)

    async def create(self, fields: Mapping[str, Any]) -> Booking:
        """
        Stores a new booking from whatever the customer submitted.
        Server-owned keys in the payload are ignored, everything else is kept as-is.
        """
        extra = {k: v for k, v in fields.items() if k not in SERVER_FIELDS}
        ignored = [k for k in fields if k in SERVER_FIELDS]
        if ignored:
            logger.debug(f"Ignoring server-owned fields in booking request: {ignored}")

        now = utc_timestamp()
        booking = Booking(
            id=new_booking_id(),
            status=BookingStatus.PENDING.value,
            createdAt=now,
            updatedAt=now,
            **extra
        )

        bookings = await self._read()
        bookings.append(booking)
        await self._write(bookings)

        logger.info(f"📥 New booking {booking.id} (type={extra.get('type')}, location={extra.get('location')})")
        return booking

    async def list_all(self, status: Optional[str] = None) -> List[Booking]:
        bookings = await self._read()
        if status is not None:
            bookings = [b for b in bookings if b.status == status]
        return bookings

    async def update_status_and_notes(self, booking_id: str, status: Optional[str], notes: Optional[str]) -> Booking:
        """
        Overwrites status and notes. Any status value is accepted, there are no
        transition rules.
        """
        bookings = await self._read()
        booking = next((b for b in bookings if b.id == booking_id), None)
        if booking is None:
            raise BookingNotFoundError(booking_id)

        previous = booking.status
        booking.status = status
        booking.notes = notes
        booking.updatedAt = later_timestamp(booking.updatedAt)
        await self._write(bookings)

        logger.info(f"✏️ Booking {booking_id} updated: {previous} -> {status}")
        return booking

    async def delete(self, booking_id: str) -> None:
        bookings = await self._read()
        remaining = [b for b in bookings if b.id != booking_id]
        if len(remaining) == len(bookings):
            raise BookingNotFoundError(booking_id)

        await self._write(remaining)
        logger.info(f"🗑️ Booking {booking_id} deleted.")

    async def compute_stats(self) -> BookingStats:
        bookings = await self._read()

        statuses = Counter(b.status for b in bookings if isinstance(b.status, str))
        by_type = Counter(self._group_key(b, "type") for b in bookings)
        by_location = Counter(self._group_key(b, "location") for b in bookings)
        recent = [b.to_record() for b in reversed(bookings[-RECENT_LIMIT:])]

        return BookingStats(
            total=len(bookings),
            pending=statuses[BookingStatus.PENDING.value],
            confirmed=statuses[BookingStatus.CONFIRMED.value],
            completed=statuses[BookingStatus.COMPLETED.value],
            cancelled=statuses[BookingStatus.CANCELLED.value],
            byType=dict(by_type),
            byLocation=dict(by_location),
            recent=recent,
        )

    @staticmethod
    def _group_key(booking: Booking, field: str) -> str:
        value = booking.extra_fields.get(field)
        if value is None or value == "":
            return UNKNOWN_KEY
        return str(value)
