"""
Availability resolution and booking acceptance.

Resolution for a date:
    1. Closed date (weekly or specific closure) -> no slots
    2. Active catalog slots, ascending
    3. Minus times held by non-cancelled appointments
    4. Minus times covered by a block on that date
    5. Optionally minus slots that already started (when ``now`` is given)

Every call reads the current state from storage.
"""
import logging
from datetime import datetime
from typing import List, Optional

from agenda.errors import DateClosed, SlotBlocked, SlotInPast, SlotTaken
from agenda.schemas.appointment import AppointmentResponse, AppointmentStatus, AppointmentUpdateRequest
from agenda.schemas.time_slot import TimeSlotResponse
from agenda.services import block_service, catalog_service, closure_service, ledger_service
from agenda.storage import Storage
from agenda.utils.time_slots import require_date, slot_datetime

logger = logging.getLogger(__name__)


def _has_started(date: str, time: str, now: Optional[datetime]) -> bool:
    return now is not None and slot_datetime(date, time) <= now


async def resolve_availability(
    storage: Storage,
    date: str,
    now: Optional[datetime] = None,
) -> List[TimeSlotResponse]:
    """
    Bookable slots for a date.

    Args:
        storage: Storage
        date: Date "YYYY-MM-DD"
        now: When given, slots starting at or before this moment are dropped

    Returns:
        Active slots in ascending time order; empty if the date is closed
    """
    require_date(date)
    if await closure_service.is_date_closed(storage, date):
        return []

    active = await catalog_service.list_active(storage)
    appointments = await ledger_service.list_by_date(storage, date)
    booked = {a.time for a in appointments if a.status != AppointmentStatus.CANCELLED}
    blocks = await block_service.list_for_date(storage, date)

    available = []
    for slot in active:
        if slot.slot_time in booked:
            continue
        if any(block_service.block_covers(block, slot.slot_time) for block in blocks):
            continue
        if _has_started(date, slot.slot_time, now):
            continue
        available.append(slot)
    return available


async def book_appointment(
    storage: Storage,
    client_name: str,
    client_phone: str,
    date: str,
    time: str,
    now: Optional[datetime] = None,
) -> AppointmentResponse:
    """
    Accept or reject a booking.

    Raises:
        ValidationError: invalid fields, all of them listed
        DateClosed: the date is closed
        SlotBlocked: the time is inside a block
        SlotInPast: ``now`` is given and the slot already started
        SlotTaken: the slot is held, including when a concurrent booking wins
    """
    ledger_service.validate_booking(client_name, client_phone, date, time)

    if await closure_service.is_date_closed(storage, date):
        logger.info(f"Booking rejected, {date} is closed")
        raise DateClosed(date)
    if await block_service.is_time_blocked(storage, date, time):
        logger.info(f"Booking rejected, {date} {time} is blocked")
        raise SlotBlocked(date, time)
    if _has_started(date, time, now):
        raise SlotInPast(date, time)
    if await ledger_service.find_by_date_time(storage, date, time):
        logger.info(f"Booking rejected, {date} {time} is taken")
        raise SlotTaken(date, time)

    # The storage re-checks occupancy atomically with the insert
    return await ledger_service.create_appointment(storage, client_name, client_phone, date, time)


async def reschedule_appointment(
    storage: Storage,
    appointment_id: str,
    date: str,
    time: str,
    patch: Optional[AppointmentUpdateRequest] = None,
) -> AppointmentResponse:
    """
    Move an appointment to another slot and mark it rescheduled.

    Args:
        storage: Storage
        appointment_id: Appointment to move
        date: New date "YYYY-MM-DD"
        time: New time "HH:MM"
        patch: Other fields sent with the move, applied in the same write

    Raises:
        ValidationError: invalid date, time or patched field
        NotFound: unknown id
        SlotTaken: another non-cancelled appointment holds the new slot
    """
    changes = patch.changes() if patch is not None else {}
    changes.update(date=date, time=time, status=AppointmentStatus.RESCHEDULED.value)

    appointment = await ledger_service.update_appointment(
        storage, appointment_id, AppointmentUpdateRequest(**changes)
    )
    logger.info(f"🔄 Appointment {appointment_id} rescheduled to {date} {time}")
    return appointment
