"""API for time slot blocks"""
from typing import List

from fastapi import APIRouter, Depends

from agenda.config import settings
from agenda.database import get_storage
from agenda.schemas.base import MessageResponse
from agenda.schemas.slot_block import BlockCheckResponse, SlotBlockCreateRequest, SlotBlockResponse
from agenda.services import block_service
from agenda.storage import Storage

router = APIRouter(prefix="/api/time-slot-blocks", tags=["blocks"])


@router.get("", response_model=List[SlotBlockResponse])
async def get_blocks(storage: Storage = Depends(get_storage)):
    """List all blocks"""
    return await block_service.list_all(storage)


@router.post("", response_model=SlotBlockResponse, status_code=201)
async def create_block(data: SlotBlockCreateRequest, storage: Storage = Depends(get_storage)):
    """Block a time range on a date"""
    return await block_service.add_block(storage, data, default_duration=settings.BLOCK_DURATION_MINUTES)


@router.get("/check/{date}/{time}", response_model=BlockCheckResponse)
async def check_block(date: str, time: str, storage: Storage = Depends(get_storage)):
    """Whether a time on a date is blocked"""
    is_blocked = await block_service.is_time_blocked(storage, date, time)
    return BlockCheckResponse(date=date, time=time, is_blocked=is_blocked)


@router.get("/{date}", response_model=List[SlotBlockResponse])
async def get_blocks_for_date(date: str, storage: Storage = Depends(get_storage)):
    """Active blocks on a date"""
    return await block_service.list_for_date(storage, date)


@router.delete("/{block_id}", response_model=MessageResponse)
async def delete_block(block_id: str, storage: Storage = Depends(get_storage)):
    """Remove a block"""
    await block_service.remove_block(storage, block_id)
    return MessageResponse(message="Block removed")
