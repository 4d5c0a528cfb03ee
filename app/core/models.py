import enum
from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    Boolean,
    Date,
    Time,
    Numeric,
    Index,
    UniqueConstraint,
    Enum as SQLEnum,
)
from app.core.db import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class MenuCategory(str, enum.Enum):
    BREAKFAST = "breakfast"
    COFFEE = "coffee"
    DESSERT = "dessert"
    BEVERAGE = "beverage"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    booking_date = Column(Date, nullable=False)
    booking_time = Column(Time, nullable=False)
    number_of_people = Column(Integer, nullable=False)
    special_requests = Column(Text, nullable=True)

    status = Column(
        SQLEnum(
            BookingStatus,
            name="booking_status",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=BookingStatus.PENDING,
    )

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_date_time", "booking_date", "booking_time"),
        Index("idx_status", "status"),
    )


class BookingSlotLock(Base):
    """One row per booked (date, time); rewritten while admitting a booking to hold its row lock."""

    __tablename__ = "booking_slot_locks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slot_date = Column(Date, nullable=False)
    slot_time = Column(Time, nullable=False)
    locked_at = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("slot_date", "slot_time", name="uq_booking_slot_locks_slot"),
    )


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(
        SQLEnum(MenuCategory, name="menu_category", values_callable=_enum_values),
        nullable=False,
    )
    is_available = Column(Boolean, default=True)
    is_recommended = Column(Boolean, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_category", "category"),
        Index("idx_available", "is_available"),
    )
