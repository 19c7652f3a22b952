import enum
from typing import Optional

from .base import CamelModel


class ClosureType(str, enum.Enum):
    WEEKLY = "weekly"
    SPECIFIC_DATE = "specific_date"


class ClosureResponse(CamelModel):
    id: str
    closure_type: str
    day_of_week: Optional[str] = None
    specific_date: Optional[str] = None  # YYYY-MM-DD
    reason: Optional[str] = None
    is_active: bool = True


class ClosureCreateRequest(CamelModel):
    closure_type: Optional[str] = None  # weekly, specific_date
    day_of_week: Optional[str] = None
    specific_date: Optional[str] = None
    reason: Optional[str] = None
    is_active: bool = True


class ClosureCheckResponse(CamelModel):
    date: str
    is_closed: bool
