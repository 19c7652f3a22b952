"""
Time slot blocks: time ranges on one date that cannot be booked.

A block covers the half-open range [start_time, end_time): a block from 10:00
to 10:30 excludes the 10:00 slot but not the 10:30 one.
"""
import logging
from typing import List

from agenda.errors import NotFound, ValidationError
from agenda.schemas.slot_block import SlotBlockCreateRequest, SlotBlockResponse
from agenda.storage import Storage
from agenda.utils.time_slots import (
    add_minutes,
    is_valid_date,
    is_valid_time,
    require_date,
    require_time,
    to_minutes,
)

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_DURATION_MINUTES = 30


def block_covers(block: SlotBlockResponse, time: str) -> bool:
    """Half-open containment test in minutes since midnight."""
    return to_minutes(block.start_time) <= to_minutes(time) < to_minutes(block.end_time)


async def add_block(
    storage: Storage,
    data: SlotBlockCreateRequest,
    default_duration: int = DEFAULT_BLOCK_DURATION_MINUTES,
) -> SlotBlockResponse:
    """
    Create a block.

    Args:
        storage: Storage
        data: Block fields; end_time may be omitted
        default_duration: Minutes added to start_time when end_time is omitted

    Raises:
        ValidationError: bad formats, or end_time not later than start_time
    """
    errors = {}
    if not is_valid_date(data.specific_date):
        errors["specificDate"] = "Date must be in YYYY-MM-DD format"
    if not is_valid_time(data.start_time):
        errors["startTime"] = "Time must be in HH:MM format"

    end_time = data.end_time
    if end_time is None and "startTime" not in errors:
        end_time = add_minutes(data.start_time, default_duration)
        if end_time is None:
            errors["endTime"] = "Block must end on the same day"
    elif end_time is not None and not is_valid_time(end_time):
        errors["endTime"] = "Time must be in HH:MM format"

    if not errors and to_minutes(end_time) <= to_minutes(data.start_time):
        errors["endTime"] = "End time must be later than start time"
    if errors:
        raise ValidationError(errors)

    block = await storage.add_block({
        "specific_date": data.specific_date,
        "start_time": data.start_time,
        "end_time": end_time,
        "reason": data.reason,
        "is_active": data.is_active,
    })
    logger.info(f"Block {block.id} added: {block.specific_date} {block.start_time}-{block.end_time}")
    return block


async def remove_block(storage: Storage, block_id: str) -> None:
    if not await storage.delete_block(block_id):
        raise NotFound("Block", block_id)
    logger.info(f"Block {block_id} removed")


async def list_for_date(storage: Storage, date: str) -> List[SlotBlockResponse]:
    """Active blocks on a date ordered by start time."""
    require_date(date)
    return await storage.list_blocks(specific_date=date)


async def list_all(storage: Storage) -> List[SlotBlockResponse]:
    return await storage.list_blocks(active_only=False)


async def is_time_blocked(storage: Storage, date: str, time: str) -> bool:
    require_date(date)
    require_time(time)
    blocks = await storage.list_blocks(specific_date=date)
    return any(block_covers(block, time) for block in blocks if block.is_active)
