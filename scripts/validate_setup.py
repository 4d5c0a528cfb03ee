#!/usr/bin/env python3
"""
Barista Cafe API setup validation
Checks configuration, imports and the database before the first deploy.
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def check_imports():
    """Check that all critical modules can be imported"""
    print("Checking module imports...")

    try:
        from app.core.db import SessionLocal, Base
        from app.core.models import Booking, BookingSlotLock, MenuItem
        from app.services.booking_store import BookingStore
        from app.services.capacity import CapacityGuard
        from app.main import app
        print("All modules import successfully")
        return True
    except Exception as e:
        print(f"Import failed: {e}")
        return False


def check_slot_grid():
    """Check the configured opening hours produce a usable grid"""
    print("\nChecking slot grid...")

    try:
        from app.core.config import settings
        from app.services.availability import slot_grid

        grid = slot_grid()
    except Exception as e:
        print(f"Slot grid failed: {e}")
        return False

    if not grid:
        print("Slot grid is empty: BOOKING_OPEN_TIME is after BOOKING_CLOSE_TIME")
        return False
    if settings.BOOKING_SLOT_CAPACITY < 1:
        print("BOOKING_SLOT_CAPACITY must be at least 1")
        return False

    print(
        f"{len(grid)} slots from {grid[0].strftime('%H:%M')} to {grid[-1].strftime('%H:%M')}, "
        f"{settings.BOOKING_SLOT_CAPACITY} bookings each"
    )
    return True


def check_database():
    """Check the database is reachable"""
    print("\nChecking database connection...")

    try:
        from app.core.db import check_connection

        check_connection()
        print("Database reachable")
        return True
    except Exception as e:
        print(f"Database check failed: {e}")
        return False


def main():
    print("Barista Cafe API - Setup Validation")
    print("=" * 50)

    checks = [
        check_imports,
        check_slot_grid,
        check_database,
    ]

    results = []
    for check in checks:
        results.append(check())

    print("\n" + "=" * 50)
    if all(results):
        print("All checks passed. The API is ready to start.")
        return 0
    else:
        print("Some checks failed. Please check the issues above.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
