from typing import Dict, Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_booking_service
from app.models.booking import BookingCreated
from app.services.booking_service import BookingService

router = APIRouter()


@router.post("/bookings", response_model=BookingCreated)
async def create_booking(
    payload: Dict[str, Any] = Body(...),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Public booking form submission. Any JSON object is accepted and stored.
    """
    booking = await booking_service.create(payload)
    return BookingCreated(
        message="Booking request received. We will be in touch shortly.",
        bookingId=booking.id,
    )
