"""
Schedule closures: days on which the business takes no bookings.

A weekly closure repeats on one weekday; a specific_date closure applies to a
single date. is_date_closed is the only place that decides whether a day is
open.
"""
import logging
from typing import List

from agenda.errors import NotFound, ValidationError
from agenda.schemas.closure import ClosureCreateRequest, ClosureResponse, ClosureType
from agenda.storage import Storage
from agenda.utils.time_slots import WEEKDAYS, is_valid_date, require_date, weekday_name

logger = logging.getLogger(__name__)


def validate_closure(data: ClosureCreateRequest) -> None:
    """Raise ValidationError naming every invalid field."""
    errors = {}

    if data.closure_type == ClosureType.WEEKLY:
        if data.day_of_week not in WEEKDAYS:
            errors["dayOfWeek"] = "A weekly closure needs a day of the week (monday..sunday)"
        if data.specific_date is not None:
            errors["specificDate"] = "A weekly closure cannot have a specific date"
    elif data.closure_type == ClosureType.SPECIFIC_DATE:
        if not is_valid_date(data.specific_date):
            errors["specificDate"] = "Date must be in YYYY-MM-DD format"
        if data.day_of_week is not None:
            errors["dayOfWeek"] = "A specific date closure cannot have a day of the week"
    else:
        errors["closureType"] = "Closure type must be 'weekly' or 'specific_date'"

    if errors:
        raise ValidationError(errors)


async def add_closure(storage: Storage, data: ClosureCreateRequest) -> ClosureResponse:
    """Create a closure. Overlapping or duplicate closures are allowed."""
    # Forms send "" for the field that does not apply
    data = data.model_copy(update={
        "day_of_week": data.day_of_week or None,
        "specific_date": data.specific_date or None,
    })
    validate_closure(data)
    closure = await storage.add_closure({
        "closure_type": data.closure_type,
        "day_of_week": data.day_of_week,
        "specific_date": data.specific_date,
        "reason": data.reason,
        "is_active": data.is_active,
    })
    logger.info(
        f"Closure {closure.id} added: {closure.closure_type} "
        f"{closure.day_of_week or closure.specific_date}"
    )
    return closure


async def remove_closure(storage: Storage, closure_id: str) -> None:
    if not await storage.delete_closure(closure_id):
        raise NotFound("Closure", closure_id)
    logger.info(f"Closure {closure_id} removed")


async def list_closures(storage: Storage) -> List[ClosureResponse]:
    """Weekly closures in weekday order, then dated closures by date."""
    closures = await storage.list_closures()

    def sort_key(closure: ClosureResponse):
        if closure.closure_type == ClosureType.WEEKLY:
            return (0, WEEKDAYS.index(closure.day_of_week) if closure.day_of_week in WEEKDAYS else 7, "")
        return (1, 0, closure.specific_date or "")

    return sorted(closures, key=sort_key)


def closure_applies(closure: ClosureResponse, date: str) -> bool:
    """Whether an active closure shuts the given date."""
    if not closure.is_active:
        return False
    if closure.closure_type == ClosureType.WEEKLY:
        return closure.day_of_week == weekday_name(date)
    if closure.closure_type == ClosureType.SPECIFIC_DATE:
        return closure.specific_date == date
    return False


async def is_date_closed(storage: Storage, date: str) -> bool:
    require_date(date)
    closures = await storage.list_closures(active_only=True)
    return any(closure_applies(closure, date) for closure in closures)
