"""API for appointments"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from agenda.config import settings
from agenda.database import get_storage
from agenda.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentUpdateRequest,
    AppointmentView,
)
from agenda.schemas.base import MessageResponse
from agenda.services import availability_service, ledger_service
from agenda.storage import Storage

router = APIRouter(prefix="/api/appointments", tags=["appointments"])


def _views(appointments: List[AppointmentResponse]) -> List[AppointmentView]:
    now = datetime.now()
    return [
        AppointmentView(
            **appointment.model_dump(),
            display_status=ledger_service.derive_display_status(appointment, now),
        )
        for appointment in appointments
    ]


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreateRequest,
    storage: Storage = Depends(get_storage),
):
    """Book an appointment"""
    now = datetime.now() if settings.EXCLUDE_PAST_SLOTS else None
    return await availability_service.book_appointment(
        storage,
        client_name=data.client_name,
        client_phone=data.client_phone,
        date=data.date,
        time=data.time,
        now=now,
    )


@router.get("", response_model=List[AppointmentView])
async def get_appointments(storage: Storage = Depends(get_storage)):
    """All appointments ordered by date and time, cancelled included"""
    return _views(await ledger_service.list_all(storage))


@router.get("/{date}", response_model=List[AppointmentView])
async def get_appointments_by_date(date: str, storage: Storage = Depends(get_storage)):
    """Appointments on one date ordered by time"""
    return _views(await ledger_service.list_by_date(storage, date))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdateRequest,
    storage: Storage = Depends(get_storage),
):
    """Update an appointment (reschedule, change status or contact data)

    Moving to another date or time without an explicit status marks the
    appointment rescheduled.
    """
    changes = data.changes()
    if "status" not in changes and ("date" in changes or "time" in changes):
        current = await ledger_service.get_appointment(storage, appointment_id)
        date = changes.get("date", current.date)
        time = changes.get("time", current.time)
        moved = (date, time) != (current.date, current.time)
        if moved and current.status != AppointmentStatus.CANCELLED:
            return await availability_service.reschedule_appointment(
                storage, appointment_id, date, time, patch=data
            )
    return await ledger_service.update_appointment(storage, appointment_id, data)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def cancel_appointment(appointment_id: str, storage: Storage = Depends(get_storage)):
    """Cancel an appointment. The record is kept."""
    await ledger_service.cancel_appointment(storage, appointment_id)
    return MessageResponse(message="Appointment cancelled")
