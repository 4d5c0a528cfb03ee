import logging

from app.core.config import settings
from app.core.errors import CapacityExceeded
from app.core.models import Booking
from app.services.booking_store import BookingStore

logger = logging.getLogger(__name__)


class CapacityGuard:
    """Admits a booking only while its slot holds fewer than `capacity` bookings.

    The count and the insert run under the store's per-slot lock, so two
    requests racing for the last seat cannot both get in.
    """

    def __init__(
        self,
        store: BookingStore,
        capacity: int | None = None,
        count_cancelled: bool | None = None,
    ):
        self.store = store
        self.capacity = settings.BOOKING_SLOT_CAPACITY if capacity is None else capacity
        self.count_cancelled = (
            settings.BOOKING_CAPACITY_COUNTS_CANCELLED
            if count_cancelled is None
            else count_cancelled
        )

    def occupancy(self, booking: Booking) -> int:
        if self.count_cancelled:
            return self.store.count_at(booking.booking_date, booking.booking_time)
        counts = self.store.count_non_cancelled_at(booking.booking_date)
        return counts.get(booking.booking_time, 0)

    def admit(self, booking: Booking) -> int:
        """Insert `booking` if its slot has room; returns the new id."""
        with self.store.slot_lock(booking.booking_date, booking.booking_time):
            occupied = self.occupancy(booking)
            if occupied >= self.capacity:
                logger.info(
                    "Slot %s %s full (%s/%s), booking rejected",
                    booking.booking_date.isoformat(),
                    booking.booking_time.strftime("%H:%M"),
                    occupied,
                    self.capacity,
                )
                raise CapacityExceeded(occupied=occupied, capacity=self.capacity)
            return self.store.insert(booking)
