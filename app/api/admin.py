from typing import Optional, List, Dict, Any

from fastapi import APIRouter, Depends

from app.api.deps import get_booking_service
from app.core.security import require_admin_token
from app.models.booking import BookingUpdate, BookingUpdated, BookingStats, OperationResult
from app.services.booking_service import BookingService

router = APIRouter(dependencies=[Depends(require_admin_token)])


@router.get("/bookings", response_model=List[Dict[str, Any]])
async def list_bookings(
    status: Optional[str] = None,
    booking_service: BookingService = Depends(get_booking_service),
):
    bookings = await booking_service.list_all(status=status)
    return [b.to_record() for b in bookings]


@router.patch("/bookings/{booking_id}", response_model=BookingUpdated)
async def update_booking(
    booking_id: str,
    update: BookingUpdate,
    booking_service: BookingService = Depends(get_booking_service),
):
    booking = await booking_service.update_status_and_notes(booking_id, update.status, update.notes)
    return BookingUpdated(booking=booking.to_record())


@router.delete("/bookings/{booking_id}", response_model=OperationResult)
async def delete_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
):
    await booking_service.delete(booking_id)
    return OperationResult()


@router.get("/stats", response_model=BookingStats)
async def booking_stats(booking_service: BookingService = Depends(get_booking_service)):
    return await booking_service.compute_stats()
