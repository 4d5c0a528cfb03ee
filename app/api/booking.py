from datetime import date as date_type, datetime, time as time_type
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from app.api.deps import get_store
from app.core.errors import MSG_BOOKING_NOT_FOUND, NotFound
from app.core.models import Booking
from app.services.booking_store import BookingStore
from app.services.capacity import CapacityGuard

logger = logging.getLogger(__name__)

router = APIRouter()

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


class BookingCreate(BaseModel):
    name: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=20)
    date: date_type
    time: str = Field(..., pattern=TIME_PATTERN)
    people: int = Field(..., ge=1, le=20)
    message: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("name", "phone")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    def slot_time(self) -> time_type:
        return datetime.strptime(self.time, "%H:%M").time()


class BookingCreated(BaseModel):
    message: str
    bookingId: int


class StatusUpdate(BaseModel):
    status: Optional[str] = None


def serialize_booking(booking: Booking) -> dict:
    return {
        "id": booking.id,
        "customer_name": booking.customer_name,
        "phone": booking.phone,
        "booking_date": booking.booking_date.isoformat(),
        "booking_time": booking.booking_time.strftime("%H:%M"),
        "number_of_people": booking.number_of_people,
        "special_requests": booking.special_requests,
        "status": booking.status.value if booking.status else None,
        "created_at": booking.created_at.isoformat() if booking.created_at else None,
        "updated_at": booking.updated_at.isoformat() if booking.updated_at else None,
    }


@router.get("")
def list_bookings(store: BookingStore = Depends(get_store)) -> List[dict]:
    return [serialize_booking(b) for b in store.list_all()]


@router.post("", status_code=201, response_model=BookingCreated)
def create_booking(payload: BookingCreate, store: BookingStore = Depends(get_store)):
    booking = Booking(
        customer_name=payload.name,
        phone=payload.phone,
        booking_date=payload.date,
        booking_time=payload.slot_time(),
        number_of_people=payload.people,
        special_requests=payload.message or "",
    )
    booking_id = CapacityGuard(store).admit(booking)
    logger.info(
        "Booking %s created for %s at %s %s",
        booking_id,
        payload.people,
        payload.date.isoformat(),
        booking.booking_time.strftime("%H:%M"),
    )
    return BookingCreated(message="Booking created successfully", bookingId=booking_id)


@router.get("/{booking_id}")
def get_booking(booking_id: int, store: BookingStore = Depends(get_store)):
    booking = store.get_by_id(booking_id)
    if not booking:
        raise NotFound(MSG_BOOKING_NOT_FOUND)
    return serialize_booking(booking)


@router.patch("/{booking_id}/status")
def update_booking_status(
    booking_id: int, payload: StatusUpdate, store: BookingStore = Depends(get_store)
):
    if not store.update_status(booking_id, payload.status):
        raise NotFound(MSG_BOOKING_NOT_FOUND)
    return {"message": "Booking status updated successfully"}
