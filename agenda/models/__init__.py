from .schedule_models import (
    Base,
    TimeSlot,
    ScheduleClosure,
    TimeSlotBlock,
    Appointment,
)

__all__ = [
    "Base",
    "TimeSlot",
    "ScheduleClosure",
    "TimeSlotBlock",
    "Appointment",
]
