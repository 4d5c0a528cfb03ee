from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.services.booking_store import BookingStore


def get_store(db: Session = Depends(get_db)) -> BookingStore:
    """Request-scoped store bound to the session from get_db."""
    return BookingStore(db)
