"""Booking errors.

Business-rule rejections (SlotTaken, SlotBlocked, DateClosed, SlotInPast,
DuplicateSlot) are expected outcomes and carry the date/time the caller needs
to react. StoreUnavailable wraps persistence failures.
"""
from typing import Dict, Optional


class BookingError(Exception):
    """Base class for all errors raised by the booking core."""

    message = "Booking error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(BookingError):
    """Malformed input. ``fields`` maps every violated field to its reason."""

    message = "Invalid data"

    def __init__(self, fields: Dict[str, str]):
        super().__init__()
        self.fields = dict(fields)

    def __str__(self) -> str:
        details = ", ".join(f"{name}: {reason}" for name, reason in self.fields.items())
        return f"{self.message} ({details})"

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.fields}


class SlotTaken(BookingError):
    message = "This time is already booked. Please choose another time."

    def __init__(self, date: str, time: str):
        super().__init__()
        self.date = date
        self.time = time

    def to_dict(self) -> dict:
        return {"message": self.message, "date": self.date, "time": self.time}


class SlotBlocked(BookingError):
    message = "This time is blocked for bookings."

    def __init__(self, date: str, time: str):
        super().__init__()
        self.date = date
        self.time = time

    def to_dict(self) -> dict:
        return {"message": self.message, "date": self.date, "time": self.time}


class SlotInPast(BookingError):
    message = "This time has already passed."

    def __init__(self, date: str, time: str):
        super().__init__()
        self.date = date
        self.time = time

    def to_dict(self) -> dict:
        return {"message": self.message, "date": self.date, "time": self.time}


class DateClosed(BookingError):
    message = "The business is closed on this date."

    def __init__(self, date: str):
        super().__init__()
        self.date = date

    def to_dict(self) -> dict:
        return {"message": self.message, "date": self.date}


class DuplicateSlot(BookingError):
    message = "A time slot with this time already exists."

    def __init__(self, slot_time: str):
        super().__init__()
        self.slot_time = slot_time

    def to_dict(self) -> dict:
        return {"message": self.message, "slotTime": self.slot_time}


class NotFound(BookingError):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id

    def to_dict(self) -> dict:
        return {"message": self.message, "id": self.entity_id}


class StoreUnavailable(BookingError):
    message = "Storage is unavailable"
