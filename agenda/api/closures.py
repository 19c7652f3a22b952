"""API for schedule closures"""
from typing import List

from fastapi import APIRouter, Depends

from agenda.database import get_storage
from agenda.schemas.base import MessageResponse
from agenda.schemas.closure import ClosureCheckResponse, ClosureCreateRequest, ClosureResponse
from agenda.services import closure_service
from agenda.storage import Storage

router = APIRouter(prefix="/api/schedule-closures", tags=["closures"])


@router.get("", response_model=List[ClosureResponse])
async def get_closures(storage: Storage = Depends(get_storage)):
    """List closures"""
    return await closure_service.list_closures(storage)


@router.post("", response_model=ClosureResponse, status_code=201)
async def create_closure(data: ClosureCreateRequest, storage: Storage = Depends(get_storage)):
    """Close a weekday or a specific date"""
    return await closure_service.add_closure(storage, data)


@router.get("/check/{date}", response_model=ClosureCheckResponse)
async def check_closure(date: str, storage: Storage = Depends(get_storage)):
    """Whether the business is closed on a date"""
    return ClosureCheckResponse(date=date, is_closed=await closure_service.is_date_closed(storage, date))


@router.delete("/{closure_id}", response_model=MessageResponse)
async def delete_closure(closure_id: str, storage: Storage = Depends(get_storage)):
    """Remove a closure"""
    await closure_service.remove_closure(storage, closure_id)
    return MessageResponse(message="Closure removed")
