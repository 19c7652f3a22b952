"""
SQLAlchemy models for the booking database.

Dates and times are stored as canonical strings ("YYYY-MM-DD", "HH:MM"),
so ORDER BY on these columns is chronological.
"""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, UniqueConstraint, text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> str:
    return str(uuid.uuid4())


class TimeSlot(Base):
    """Time-of-day slots offered by the business"""
    __tablename__ = "time_slots"

    id = Column(String(36), primary_key=True, default=generate_id)
    slot_time = Column(String(5), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("slot_time", name="uq_time_slots_slot_time"),
    )


class ScheduleClosure(Base):
    """Whole-day closures, weekly or on a specific date"""
    __tablename__ = "schedule_closures"

    id = Column(String(36), primary_key=True, default=generate_id)
    closure_type = Column(String(20), nullable=False)  # weekly, specific_date
    day_of_week = Column(String(10), nullable=True)
    specific_date = Column(String(10), nullable=True, index=True)
    reason = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)


class TimeSlotBlock(Base):
    """Time range on one date that cannot be booked"""
    __tablename__ = "time_slot_blocks"

    id = Column(String(36), primary_key=True, default=generate_id)
    specific_date = Column(String(10), nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    reason = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)


class Appointment(Base):
    """Client appointments"""
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    client_name = Column(Text, nullable=False)
    client_phone = Column(String(20), nullable=False)
    date = Column(String(10), nullable=False)
    time = Column(String(5), nullable=False)
    status = Column(String(20), default="confirmed", nullable=False, index=True)  # confirmed, rescheduled, cancelled
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index("idx_appointments_date_time", "date", "time"),
        # At most one non-cancelled appointment per (date, time)
        Index(
            "uq_appointments_active_slot",
            "date",
            "time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )
