from typing import Optional

from .base import CamelModel


class SlotBlockResponse(CamelModel):
    id: str
    specific_date: str
    start_time: str
    end_time: str
    reason: Optional[str] = None
    is_active: bool = True


class SlotBlockCreateRequest(CamelModel):
    specific_date: Optional[str] = None
    start_time: Optional[str] = None
    # Defaults to start_time + BLOCK_DURATION_MINUTES
    end_time: Optional[str] = None
    reason: Optional[str] = None
    is_active: bool = True


class BlockCheckResponse(CamelModel):
    date: str
    time: str
    is_blocked: bool
