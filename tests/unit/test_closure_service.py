"""Unit tests for schedule closures."""
import pytest

from agenda.errors import NotFound, ValidationError
from agenda.schemas.closure import ClosureCreateRequest, ClosureResponse
from agenda.services import closure_service


def weekly(day, is_active=True):
    return ClosureCreateRequest(closure_type="weekly", day_of_week=day, is_active=is_active)


def on_date(day, is_active=True):
    return ClosureCreateRequest(closure_type="specific_date", specific_date=day, is_active=is_active)


@pytest.mark.asyncio
async def test_weekly_closure_matches_weekday(storage):
    await closure_service.add_closure(storage, weekly("tuesday"))

    assert await closure_service.is_date_closed(storage, "2025-06-10")
    assert await closure_service.is_date_closed(storage, "2025-06-17")
    assert not await closure_service.is_date_closed(storage, "2025-06-11")


@pytest.mark.asyncio
async def test_specific_date_closure(storage):
    await closure_service.add_closure(storage, on_date("2025-12-25"))

    assert await closure_service.is_date_closed(storage, "2025-12-25")
    assert not await closure_service.is_date_closed(storage, "2026-12-25")


@pytest.mark.asyncio
async def test_inactive_closure_is_ignored(storage):
    await closure_service.add_closure(storage, weekly("tuesday", is_active=False))

    assert not await closure_service.is_date_closed(storage, "2025-06-10")


@pytest.mark.asyncio
async def test_empty_strings_are_normalized(storage):
    closure = await closure_service.add_closure(
        storage,
        ClosureCreateRequest(closure_type="weekly", day_of_week="sunday", specific_date=""),
    )

    assert closure.specific_date is None
    assert closure.day_of_week == "sunday"


@pytest.mark.asyncio
@pytest.mark.parametrize("data, field", [
    (ClosureCreateRequest(closure_type="weekly"), "dayOfWeek"),
    (ClosureCreateRequest(closure_type="weekly", day_of_week="funday"), "dayOfWeek"),
    (ClosureCreateRequest(closure_type="specific_date"), "specificDate"),
    (ClosureCreateRequest(closure_type="specific_date", specific_date="2025-13-01"), "specificDate"),
    (ClosureCreateRequest(closure_type="monthly", day_of_week="monday"), "closureType"),
])
async def test_invalid_closures(storage, data, field):
    with pytest.raises(ValidationError) as exc_info:
        await closure_service.add_closure(storage, data)

    assert field in exc_info.value.fields


@pytest.mark.asyncio
async def test_weekly_closure_with_date_is_rejected(storage):
    data = ClosureCreateRequest(closure_type="weekly", day_of_week="monday", specific_date="2025-06-09")

    with pytest.raises(ValidationError) as exc_info:
        await closure_service.add_closure(storage, data)

    assert "specificDate" in exc_info.value.fields


@pytest.mark.asyncio
async def test_list_closures_order(storage):
    await closure_service.add_closure(storage, on_date("2025-12-25"))
    await closure_service.add_closure(storage, weekly("sunday"))
    await closure_service.add_closure(storage, on_date("2025-01-01"))
    await closure_service.add_closure(storage, weekly("monday"))

    closures = await closure_service.list_closures(storage)

    assert [c.day_of_week or c.specific_date for c in closures] == [
        "monday", "sunday", "2025-01-01", "2025-12-25",
    ]


@pytest.mark.asyncio
async def test_remove_closure(storage):
    closure = await closure_service.add_closure(storage, weekly("tuesday"))

    await closure_service.remove_closure(storage, closure.id)

    assert not await closure_service.is_date_closed(storage, "2025-06-10")
    with pytest.raises(NotFound):
        await closure_service.remove_closure(storage, closure.id)


def test_closure_applies():
    closure = ClosureResponse(id="c1", closure_type="specific_date", specific_date="2025-06-10")

    assert closure_service.closure_applies(closure, "2025-06-10")
    assert not closure_service.closure_applies(closure, "2025-06-11")
