import enum
from datetime import datetime
from typing import Optional

from .base import CamelModel


class AppointmentStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    RESCHEDULED = "rescheduled"
    CANCELLED = "cancelled"


class DisplayStatus(str, enum.Enum):
    """Read-time classification, never stored."""
    CONFIRMED = "confirmed"
    RESCHEDULED = "rescheduled"
    OVERDUE = "overdue"


class AppointmentResponse(CamelModel):
    id: str
    client_name: str
    client_phone: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    status: str = AppointmentStatus.CONFIRMED.value
    created_at: Optional[datetime] = None


class AppointmentView(AppointmentResponse):
    display_status: Optional[str] = None


class AppointmentCreateRequest(CamelModel):
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None


class AppointmentUpdateRequest(CamelModel):
    """Partial update. Only fields present in the request are applied."""
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    status: Optional[str] = None

    def changes(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}
