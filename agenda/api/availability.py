"""API for bookable slots"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from agenda.config import settings
from agenda.database import get_storage
from agenda.schemas.time_slot import TimeSlotResponse
from agenda.services import availability_service
from agenda.storage import Storage

router = APIRouter(prefix="/api/available-slots", tags=["availability"])


@router.get("/{date}", response_model=List[TimeSlotResponse])
async def get_available_slots(date: str, storage: Storage = Depends(get_storage)):
    """Slots that can still be booked on a date (empty when the day is closed)"""
    now = datetime.now() if settings.EXCLUDE_PAST_SLOTS else None
    return await availability_service.resolve_availability(storage, date, now=now)
