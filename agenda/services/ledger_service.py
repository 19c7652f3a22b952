"""
Appointment ledger.

Provides:
- Creating appointments (one non-cancelled appointment per date and time)
- Partial updates and soft cancellation
- Listing by date or in full, ordered by date and time
- The read-time display status ("overdue" is never stored)
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from agenda.errors import NotFound, ValidationError
from agenda.schemas.appointment import (
    AppointmentResponse,
    AppointmentStatus,
    AppointmentUpdateRequest,
    DisplayStatus,
)
from agenda.storage import Storage
from agenda.utils.time_slots import PHONE_PATTERN, is_valid_date, is_valid_time, require_date, slot_datetime

logger = logging.getLogger(__name__)

MIN_CLIENT_NAME_LENGTH = 2

STATUSES = {status.value for status in AppointmentStatus}


def _name_error(value) -> Optional[str]:
    if not isinstance(value, str) or len(value.strip()) < MIN_CLIENT_NAME_LENGTH:
        return f"Name must have at least {MIN_CLIENT_NAME_LENGTH} characters"
    return None


def _phone_error(value) -> Optional[str]:
    if not isinstance(value, str) or not PHONE_PATTERN.fullmatch(value):
        return "Phone must be in the format (11) 99999-9999"
    return None


def _date_error(value) -> Optional[str]:
    if not is_valid_date(value):
        return "Date must be in YYYY-MM-DD format"
    return None


def _time_error(value) -> Optional[str]:
    if not is_valid_time(value):
        return "Time must be in HH:MM format"
    return None


FIELD_CHECKS = {
    "client_name": ("clientName", _name_error),
    "client_phone": ("clientPhone", _phone_error),
    "date": ("date", _date_error),
    "time": ("time", _time_error),
}


def validate_fields(fields: Dict[str, object]) -> None:
    """Check the given appointment fields and report every violation at once."""
    errors = {}
    for name, value in fields.items():
        if name in FIELD_CHECKS:
            label, check = FIELD_CHECKS[name]
            error = check(value)
            if error:
                errors[label] = error
        elif name == "status" and value not in STATUSES:
            errors["status"] = f"Status must be one of: {', '.join(sorted(STATUSES))}"
    if errors:
        raise ValidationError(errors)


def validate_booking(client_name, client_phone, date, time) -> None:
    validate_fields({
        "client_name": client_name,
        "client_phone": client_phone,
        "date": date,
        "time": time,
    })


async def create_appointment(
    storage: Storage,
    client_name: str,
    client_phone: str,
    date: str,
    time: str,
) -> AppointmentResponse:
    """
    Insert a confirmed appointment.

    Raises:
        ValidationError: invalid fields
        SlotTaken: a non-cancelled appointment already holds (date, time)
    """
    validate_booking(client_name, client_phone, date, time)
    appointment = await storage.add_appointment({
        "client_name": client_name.strip(),
        "client_phone": client_phone,
        "date": date,
        "time": time,
        "status": AppointmentStatus.CONFIRMED.value,
    })
    logger.info(f"✅ Appointment {appointment.id} booked for {date} {time}")
    return appointment


async def get_appointment(storage: Storage, appointment_id: str) -> AppointmentResponse:
    appointment = await storage.get_appointment(appointment_id)
    if appointment is None:
        raise NotFound("Appointment", appointment_id)
    return appointment


async def find_by_date_time(storage: Storage, date: str, time: str) -> Optional[AppointmentResponse]:
    """The appointment occupying (date, time). Cancelled appointments occupy nothing."""
    return await storage.find_active_appointment(date, time)


async def update_appointment(
    storage: Storage,
    appointment_id: str,
    patch: AppointmentUpdateRequest,
) -> AppointmentResponse:
    """
    Apply the fields present in ``patch``.

    Moving to another date/time is checked against every other non-cancelled
    appointment. Fields not sent are left untouched.

    Raises:
        ValidationError: a sent field is invalid (including an explicit null)
        NotFound: unknown id
        SlotTaken: the target slot is held by another appointment
    """
    changes = patch.changes()
    validate_fields(changes)
    if "client_name" in changes:
        changes["client_name"] = changes["client_name"].strip()

    if not changes:
        return await get_appointment(storage, appointment_id)

    appointment = await storage.update_appointment(appointment_id, changes)
    if appointment is None:
        raise NotFound("Appointment", appointment_id)
    logger.info(f"Appointment {appointment_id} updated: {', '.join(sorted(changes))}")
    return appointment


async def cancel_appointment(storage: Storage, appointment_id: str) -> AppointmentResponse:
    """Soft cancel. Cancelling an already cancelled appointment is a no-op."""
    current = await get_appointment(storage, appointment_id)
    if current.status == AppointmentStatus.CANCELLED:
        return current

    appointment = await storage.update_appointment(
        appointment_id, {"status": AppointmentStatus.CANCELLED.value}
    )
    if appointment is None:
        raise NotFound("Appointment", appointment_id)
    logger.info(f"❌ Appointment {appointment_id} cancelled ({appointment.date} {appointment.time})")
    return appointment


async def list_by_date(storage: Storage, date: str) -> List[AppointmentResponse]:
    require_date(date)
    return await storage.list_appointments(date=date)


async def list_all(storage: Storage) -> List[AppointmentResponse]:
    return await storage.list_appointments()


def derive_display_status(appointment: AppointmentResponse, now: datetime) -> Optional[str]:
    """
    Status shown to the manager.

    Returns:
        None for cancelled appointments (hidden), "rescheduled", "overdue" once
        the start time has passed, otherwise "confirmed"
    """
    if appointment.status == AppointmentStatus.CANCELLED:
        return None
    if appointment.status == AppointmentStatus.RESCHEDULED:
        return DisplayStatus.RESCHEDULED.value
    if slot_datetime(appointment.date, appointment.time) < now:
        return DisplayStatus.OVERDUE.value
    return DisplayStatus.CONFIRMED.value
