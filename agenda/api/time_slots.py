"""API for the time slot catalog"""
from typing import List

from fastapi import APIRouter, Depends

from agenda.database import get_storage
from agenda.schemas.base import MessageResponse
from agenda.schemas.time_slot import TimeSlotCreateRequest, TimeSlotResponse, TimeSlotUpdateRequest
from agenda.services import catalog_service
from agenda.storage import Storage

router = APIRouter(prefix="/api/time-slots", tags=["time-slots"])


@router.get("", response_model=List[TimeSlotResponse])
async def get_time_slots(storage: Storage = Depends(get_storage)):
    """All slots, active and inactive"""
    return await catalog_service.list_all(storage)


@router.get("/active", response_model=List[TimeSlotResponse])
async def get_active_time_slots(storage: Storage = Depends(get_storage)):
    return await catalog_service.list_active(storage)


@router.post("", response_model=TimeSlotResponse, status_code=201)
async def create_time_slot(data: TimeSlotCreateRequest, storage: Storage = Depends(get_storage)):
    """Add a slot"""
    return await catalog_service.add_slot(storage, data.slot_time, is_active=data.is_active)


@router.put("/{slot_id}", response_model=TimeSlotResponse)
async def update_time_slot(
    slot_id: str,
    data: TimeSlotUpdateRequest,
    storage: Storage = Depends(get_storage),
):
    """Toggle and/or rename a slot"""
    return await catalog_service.update_slot(storage, slot_id, data)


@router.delete("/{slot_id}", response_model=MessageResponse)
async def delete_time_slot(slot_id: str, storage: Storage = Depends(get_storage)):
    """Remove a slot"""
    await catalog_service.remove_slot(storage, slot_id)
    return MessageResponse(message="Time slot removed")
