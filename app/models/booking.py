from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Keys owned by the server; callers cannot set them on creation
SERVER_FIELDS = ("id", "status", "notes", "createdAt", "updatedAt")


class Booking(BaseModel):
    """
    A booking record as persisted in the bookings file.
    Known fields are declared; everything the customer submitted
    (type, location, contact and property details...) is kept as extra fields.
    """
    model_config = ConfigDict(extra="allow")

    # Untyped: records on disk are pass-through data and are never rejected
    id: Any = None
    status: Any = None
    notes: Any = None
    createdAt: Any = None
    updatedAt: Any = None

    @property
    def extra_fields(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def to_record(self) -> Dict[str, Any]:
        # Only the keys the record was built with, so files round-trip unchanged
        return self.model_dump(exclude_unset=True)


# --- Request Models ---

class BookingUpdate(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None


# --- Response Models ---

class BookingCreated(BaseModel):
    success: bool = True
    message: str
    bookingId: str


class BookingUpdated(BaseModel):
    success: bool = True
    booking: Dict[str, Any]


class OperationResult(BaseModel):
    success: bool = True


class BookingStats(BaseModel):
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    completed: int = 0
    cancelled: int = 0
    byType: Dict[str, int] = Field(default_factory=dict)
    byLocation: Dict[str, int] = Field(default_factory=dict)
    recent: List[Dict[str, Any]] = Field(default_factory=list)
