from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_store
from app.services.availability import compute_availability
from app.services.booking_store import BookingStore

router = APIRouter()


class SlotItem(BaseModel):
    time: str
    available: bool
    bookingsCount: int


@router.get("/{slot_date}", response_model=List[SlotItem])
def list_available_slots(slot_date: date, store: BookingStore = Depends(get_store)):
    """Every slot of the day with its non-cancelled booking count."""
    counts = store.count_non_cancelled_at(slot_date)
    return compute_availability(counts)
