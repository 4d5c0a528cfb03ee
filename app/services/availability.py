from datetime import date, datetime, time, timedelta
from typing import Dict, List

from app.core.config import settings


def _parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def slot_grid(
    open_time: str | None = None,
    close_time: str | None = None,
    step_minutes: int | None = None,
) -> List[time]:
    """Every slot boundary from opening through closing time, inclusive."""
    start = _parse_hhmm(open_time or settings.BOOKING_OPEN_TIME)
    end = _parse_hhmm(close_time or settings.BOOKING_CLOSE_TIME)
    step = timedelta(minutes=step_minutes or settings.BOOKING_SLOT_MINUTES)

    anchor = date.min
    current = datetime.combine(anchor, start)
    last = datetime.combine(anchor, end)
    slots = []
    while current <= last:
        slots.append(current.time())
        current += step
    return slots


def compute_availability(
    counts: Dict[time, int],
    capacity: int | None = None,
    grid: List[time] | None = None,
) -> List[dict]:
    """Project per-time booking counts onto the slot grid.

    `counts` holds non-cancelled bookings for one date keyed by time of day;
    times outside the grid are ignored.
    """
    limit = settings.BOOKING_SLOT_CAPACITY if capacity is None else capacity
    results = []
    for slot in grid if grid is not None else slot_grid():
        booked = counts.get(slot, 0)
        results.append(
            {
                "time": slot.strftime("%H:%M"),
                "available": booked < limit,
                "bookingsCount": booked,
            }
        )
    return results
