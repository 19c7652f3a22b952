"""
Time slot catalog.

Provides:
- Adding, renaming, toggling and removing slots
- Listing active and all slots ordered by time
- Seeding the default catalog on first start
"""
import logging
from typing import Iterable, List

from agenda.errors import NotFound, ValidationError
from agenda.schemas.time_slot import TimeSlotResponse, TimeSlotUpdateRequest
from agenda.storage import Storage
from agenda.utils.time_slots import is_valid_time

logger = logging.getLogger(__name__)


def _check_slot_time(slot_time) -> None:
    if not is_valid_time(slot_time):
        raise ValidationError({"slotTime": "Time must be in HH:MM format"})


async def add_slot(storage: Storage, slot_time: str, is_active: bool = True) -> TimeSlotResponse:
    """
    Add a slot to the catalog.

    Raises:
        ValidationError: slot_time is not a valid "HH:MM"
        DuplicateSlot: a slot with this time already exists (active or not)
    """
    _check_slot_time(slot_time)
    slot = await storage.add_time_slot(slot_time, is_active=is_active)
    logger.info(f"Time slot {slot.slot_time} added (id={slot.id})")
    return slot


async def set_active(storage: Storage, slot_id: str, is_active: bool) -> TimeSlotResponse:
    """Enable or disable a slot. Setting the current value again changes nothing."""
    slot = await storage.update_time_slot(slot_id, {"is_active": is_active})
    if slot is None:
        raise NotFound("Time slot", slot_id)
    return slot


async def rename_slot(storage: Storage, slot_id: str, slot_time: str) -> TimeSlotResponse:
    _check_slot_time(slot_time)
    slot = await storage.update_time_slot(slot_id, {"slot_time": slot_time})
    if slot is None:
        raise NotFound("Time slot", slot_id)
    return slot


async def update_slot(storage: Storage, slot_id: str, patch: TimeSlotUpdateRequest) -> TimeSlotResponse:
    """Apply a toggle and/or rename in one call."""
    changes = {}
    if patch.slot_time is not None:
        _check_slot_time(patch.slot_time)
        changes["slot_time"] = patch.slot_time
    if patch.is_active is not None:
        changes["is_active"] = patch.is_active

    if not changes:
        slot = await storage.get_time_slot(slot_id)
    else:
        slot = await storage.update_time_slot(slot_id, changes)
    if slot is None:
        raise NotFound("Time slot", slot_id)
    return slot


async def remove_slot(storage: Storage, slot_id: str) -> None:
    """Hard delete. Appointments already booked at this time are left alone."""
    if not await storage.delete_time_slot(slot_id):
        raise NotFound("Time slot", slot_id)
    logger.info(f"Time slot {slot_id} removed")


async def list_active(storage: Storage) -> List[TimeSlotResponse]:
    return await storage.list_time_slots(active_only=True)


async def list_all(storage: Storage) -> List[TimeSlotResponse]:
    return await storage.list_time_slots()


async def seed_default_slots(storage: Storage, times: Iterable[str]) -> int:
    """
    Fill an empty catalog with the default times.

    Returns:
        Number of slots created (0 if the catalog already had entries)
    """
    if await storage.list_time_slots():
        return 0

    created = 0
    for slot_time in times:
        await add_slot(storage, slot_time)
        created += 1
    logger.info(f"🌱 Seeded {created} default time slots")
    return created
