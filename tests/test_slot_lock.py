import threading
from datetime import date, time
from time import sleep

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, build_engine
from app.core.errors import CapacityExceeded, StorageError
from app.core.models import Booking, BookingSlotLock
from app.services.booking_store import BookingStore
from app.services.capacity import CapacityGuard

DAY = date(2025, 6, 1)
SLOT = time(10, 0)


def _booking(name="Ana"):
    return Booking(
        customer_name=name,
        phone="555-1234",
        booking_date=DAY,
        booking_time=SLOT,
        number_of_people=2,
    )


@pytest.fixture
def file_sessions(tmp_path):
    """Sessions on a file-backed database, one connection per session."""
    engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


def test_concurrent_requests_cannot_overfill_slot(file_sessions, monkeypatch):
    db = file_sessions()
    try:
        guard = CapacityGuard(BookingStore(db), capacity=5)
        for n in range(4):
            guard.admit(_booking(f"Guest {n}"))
    finally:
        db.close()

    # widen the gap between counting and inserting
    real_count_at = BookingStore.count_at

    def slow_count_at(self, booking_date, booking_time):
        occupied = real_count_at(self, booking_date, booking_time)
        sleep(0.2)
        return occupied

    monkeypatch.setattr(BookingStore, "count_at", slow_count_at)

    start = threading.Barrier(2)
    results = []

    def request(name):
        session = file_sessions()
        try:
            start.wait()
            results.append(CapacityGuard(BookingStore(session), capacity=5).admit(_booking(name)))
        except CapacityExceeded as exc:
            results.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=request, args=(f"Late {n}",)) for n in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(results) == 2
    assert sum(isinstance(r, CapacityExceeded) for r in results) == 1

    db = file_sessions()
    try:
        assert real_count_at(BookingStore(db), DAY, SLOT) == 5
    finally:
        db.close()


def test_lock_row_is_reused_across_requests(file_sessions):
    db = file_sessions()
    try:
        store = BookingStore(db)
        for n in range(3):
            CapacityGuard(store, capacity=5).admit(_booking(f"Guest {n}"))
        assert db.query(BookingSlotLock).count() == 1
        assert db.query(BookingSlotLock).one().locked_at is not None
    finally:
        db.close()


def test_lock_insert_is_retried_when_first_writer_rolled_back(store, test_db, monkeypatch):
    real_flush = test_db.flush
    failures = []

    def flush_losing_once(*args, **kwargs):
        if not failures:
            failures.append(1)
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        return real_flush(*args, **kwargs)

    monkeypatch.setattr(test_db, "flush", flush_losing_once)

    with store.slot_lock(DAY, SLOT):
        store.insert(_booking())

    assert failures == [1]
    assert test_db.query(BookingSlotLock).count() == 1
    assert store.count_at(DAY, SLOT) == 1


def test_lock_insert_gives_up_after_second_conflict(store, test_db, monkeypatch):
    def always_conflict(*args, **kwargs):
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(test_db, "flush", always_conflict)

    with pytest.raises(StorageError):
        with store.slot_lock(DAY, SLOT):
            pass
