from typing import Optional

from .base import CamelModel


class TimeSlotResponse(CamelModel):
    id: str
    slot_time: str  # HH:MM
    is_active: bool = True


class TimeSlotCreateRequest(CamelModel):
    slot_time: Optional[str] = None
    is_active: bool = True


class TimeSlotUpdateRequest(CamelModel):
    slot_time: Optional[str] = None
    is_active: Optional[bool] = None
