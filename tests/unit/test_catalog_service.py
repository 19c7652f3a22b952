"""
Unit tests for the time slot catalog.

Checks:
- Adding slots and rejecting bad or duplicate times
- Toggling and renaming
- Ordering of listings
- Seeding the default catalog
"""
import pytest

from agenda.config import DEFAULT_TIME_SLOTS
from agenda.errors import DuplicateSlot, NotFound, ValidationError
from agenda.schemas.time_slot import TimeSlotUpdateRequest
from agenda.services import catalog_service


@pytest.mark.asyncio
async def test_add_slot(storage):
    slot = await catalog_service.add_slot(storage, "09:00")

    assert slot.id
    assert slot.slot_time == "09:00"
    assert slot.is_active is True


@pytest.mark.asyncio
async def test_add_slot_rejects_bad_format(storage):
    with pytest.raises(ValidationError) as exc_info:
        await catalog_service.add_slot(storage, "9h00")

    assert "slotTime" in exc_info.value.fields


@pytest.mark.asyncio
async def test_add_duplicate_slot(storage):
    slot = await catalog_service.add_slot(storage, "09:00")
    await catalog_service.set_active(storage, slot.id, False)

    # Inactive slots still count as duplicates
    with pytest.raises(DuplicateSlot):
        await catalog_service.add_slot(storage, "09:00")


@pytest.mark.asyncio
async def test_set_active_is_idempotent(storage):
    slot = await catalog_service.add_slot(storage, "10:00")

    first = await catalog_service.set_active(storage, slot.id, False)
    second = await catalog_service.set_active(storage, slot.id, False)

    assert first.is_active is False
    assert second.is_active is False
    assert await catalog_service.list_active(storage) == []


@pytest.mark.asyncio
async def test_rename_slot(storage):
    slot = await catalog_service.add_slot(storage, "10:00")
    await catalog_service.add_slot(storage, "11:00")

    renamed = await catalog_service.rename_slot(storage, slot.id, "10:15")
    assert renamed.slot_time == "10:15"

    with pytest.raises(DuplicateSlot):
        await catalog_service.rename_slot(storage, slot.id, "11:00")


@pytest.mark.asyncio
async def test_update_slot_patch(storage):
    slot = await catalog_service.add_slot(storage, "14:00")

    updated = await catalog_service.update_slot(
        storage, slot.id, TimeSlotUpdateRequest(slot_time="14:30", is_active=False)
    )

    assert updated.slot_time == "14:30"
    assert updated.is_active is False


@pytest.mark.asyncio
async def test_unknown_slot(storage):
    with pytest.raises(NotFound):
        await catalog_service.set_active(storage, "missing", True)
    with pytest.raises(NotFound):
        await catalog_service.remove_slot(storage, "missing")


@pytest.mark.asyncio
async def test_listings_are_sorted(storage):
    for slot_time in ["14:00", "09:30", "09:00"]:
        await catalog_service.add_slot(storage, slot_time)
    inactive = await catalog_service.add_slot(storage, "08:00", is_active=False)

    all_times = [s.slot_time for s in await catalog_service.list_all(storage)]
    active_times = [s.slot_time for s in await catalog_service.list_active(storage)]

    assert all_times == ["08:00", "09:00", "09:30", "14:00"]
    assert active_times == ["09:00", "09:30", "14:00"]

    await catalog_service.remove_slot(storage, inactive.id)
    assert len(await catalog_service.list_all(storage)) == 3


@pytest.mark.asyncio
async def test_seed_default_slots_only_once(storage):
    created = await catalog_service.seed_default_slots(storage, DEFAULT_TIME_SLOTS)
    again = await catalog_service.seed_default_slots(storage, DEFAULT_TIME_SLOTS)

    assert created == len(DEFAULT_TIME_SLOTS)
    assert again == 0
    assert [s.slot_time for s in await catalog_service.list_active(storage)] == DEFAULT_TIME_SLOTS


@pytest.mark.asyncio
@pytest.mark.parametrize("slot_time", ["09:00\n", "\u0660\u0669:\u0660\u0660"])
async def test_non_canonical_time_is_not_a_second_slot(storage, slot_time):
    await catalog_service.add_slot(storage, "09:00")

    with pytest.raises(ValidationError):
        await catalog_service.add_slot(storage, slot_time)

    assert [s.slot_time for s in await catalog_service.list_all(storage)] == ["09:00"]
