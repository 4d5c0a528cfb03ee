from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Dict, Iterator, List, Optional
import logging

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ValidationError, storage_errors
from app.core.models import Booking, BookingSlotLock, BookingStatus, MenuItem

logger = logging.getLogger(__name__)


def parse_status(value) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError:
        raise ValidationError(
            "Invalid status",
            field_errors=[{"field": "status", "message": "Invalid status"}],
        )


class BookingStore:
    """Bookings and menu items behind one request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, booking: Booking) -> int:
        """Persist a new booking as pending and commit. Returns its id."""
        booking.status = BookingStatus.PENDING
        if booking.special_requests is None:
            booking.special_requests = ""
        with storage_errors("create booking", self.db):
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
        return booking.id

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        with storage_errors("fetch booking", self.db):
            return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def list_all(self) -> List[Booking]:
        with storage_errors("fetch bookings", self.db):
            return (
                self.db.query(Booking)
                .order_by(
                    Booking.booking_date.desc(),
                    Booking.booking_time.desc(),
                    Booking.id.desc(),
                )
                .all()
            )

    def count_at(self, booking_date: date, booking_time: time) -> int:
        """Bookings at exactly this date and time, whatever their status."""
        with storage_errors("create booking", self.db):
            return (
                self.db.query(func.count(Booking.id))
                .filter(
                    Booking.booking_date == booking_date,
                    Booking.booking_time == booking_time,
                )
                .scalar()
            ) or 0

    def count_non_cancelled_at(self, booking_date: date) -> Dict[time, int]:
        with storage_errors("fetch available slots", self.db):
            rows = (
                self.db.query(Booking.booking_time, func.count(Booking.id))
                .filter(
                    Booking.booking_date == booking_date,
                    Booking.status != BookingStatus.CANCELLED,
                )
                .group_by(Booking.booking_time)
                .all()
            )
        return {r[0]: r[1] for r in rows}

    def update_status(self, booking_id: int, new_status) -> bool:
        """Overwrite the status; any status may follow any other.

        Returns False when no booking has this id.
        """
        status = parse_status(new_status)
        with storage_errors("update booking status", self.db):
            booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
            if not booking:
                return False
            previous = booking.status
            booking.status = status
            self.db.commit()
        logger.info(
            "Booking %s status %s -> %s",
            booking_id,
            previous.value if previous else None,
            status.value,
        )
        return True

    def list_menu(self) -> List[MenuItem]:
        with storage_errors("fetch menu items", self.db):
            return (
                self.db.query(MenuItem)
                .order_by(MenuItem.category, MenuItem.name)
                .all()
            )

    @contextmanager
    def slot_lock(self, booking_date: date, booking_time: time) -> Iterator[None]:
        """Hold the row lock for one slot until the transaction ends.

        Work done inside the block is serialized against every other
        request for the same (date, time). Any exception rolls back and
        thereby releases the lock; a commit inside the block releases it too.
        """
        with storage_errors("create booking", self.db):
            self._acquire_slot(booking_date, booking_time)
        try:
            yield
        except Exception:
            self.db.rollback()
            raise

    def _acquire_slot(self, booking_date: date, booking_time: time) -> None:
        # a second attempt covers the request that won the insert race
        # rolling back instead of committing
        for attempt in range(2):
            if self._touch_slot(booking_date, booking_time):
                return

            self.db.add(BookingSlotLock(slot_date=booking_date, slot_time=booking_time))
            try:
                # the uncommitted row is itself locked until this transaction ends
                self.db.flush()
                return
            except IntegrityError:
                # another request created the row first; wait on its lock instead
                self.db.rollback()
                if attempt:
                    raise

    def _touch_slot(self, booking_date: date, booking_time: time) -> bool:
        """Rewrite the slot's lock row, blocking while another transaction holds it."""
        result = self.db.execute(
            update(BookingSlotLock)
            .where(
                BookingSlotLock.slot_date == booking_date,
                BookingSlotLock.slot_time == booking_time,
            )
            .values(locked_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
