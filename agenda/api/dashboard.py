"""API for dashboard statistics"""
from datetime import date

from fastapi import APIRouter, Depends

from agenda.database import get_storage
from agenda.schemas.dashboard import DashboardStatsResponse
from agenda.services import dashboard_service
from agenda.storage import Storage

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(storage: Storage = Depends(get_storage)):
    """Booking counters and today's occupancy"""
    return await dashboard_service.get_dashboard_stats(storage, date.today())
