"""
Row <-> record translation for the SQL store.

Column names live here and nowhere else in the services. Record fields and
columns are both snake_case, so every entry is an identity; the camelCase
wire format is handled by CamelModel, not here. Values pass through unchanged.
"""
from typing import Dict

from agenda.models.schedule_models import Appointment, ScheduleClosure, TimeSlot, TimeSlotBlock
from agenda.schemas.appointment import AppointmentResponse
from agenda.schemas.closure import ClosureResponse
from agenda.schemas.slot_block import SlotBlockResponse
from agenda.schemas.time_slot import TimeSlotResponse

# record field -> table column
TIME_SLOT_COLUMNS: Dict[str, str] = {
    "id": "id",
    "slot_time": "slot_time",
    "is_active": "is_active",
}

CLOSURE_COLUMNS: Dict[str, str] = {
    "id": "id",
    "closure_type": "closure_type",
    "day_of_week": "day_of_week",
    "specific_date": "specific_date",
    "reason": "reason",
    "is_active": "is_active",
}

BLOCK_COLUMNS: Dict[str, str] = {
    "id": "id",
    "specific_date": "specific_date",
    "start_time": "start_time",
    "end_time": "end_time",
    "reason": "reason",
    "is_active": "is_active",
}

APPOINTMENT_COLUMNS: Dict[str, str] = {
    "id": "id",
    "client_name": "client_name",
    "client_phone": "client_phone",
    "date": "date",
    "time": "time",
    "status": "status",
    "created_at": "created_at",
}


def to_columns(fields: dict, columns: Dict[str, str]) -> dict:
    """Rename record fields to column names. Unknown fields are an error."""
    unknown = set(fields) - set(columns)
    if unknown:
        raise KeyError(f"Unknown fields: {', '.join(sorted(unknown))}")
    return {columns[name]: value for name, value in fields.items()}


def _from_row(row, columns: Dict[str, str]) -> dict:
    return {name: getattr(row, column) for name, column in columns.items()}


def time_slot_from_row(row: TimeSlot) -> TimeSlotResponse:
    return TimeSlotResponse(**_from_row(row, TIME_SLOT_COLUMNS))


def closure_from_row(row: ScheduleClosure) -> ClosureResponse:
    return ClosureResponse(**_from_row(row, CLOSURE_COLUMNS))


def block_from_row(row: TimeSlotBlock) -> SlotBlockResponse:
    return SlotBlockResponse(**_from_row(row, BLOCK_COLUMNS))


def appointment_from_row(row: Appointment) -> AppointmentResponse:
    return AppointmentResponse(**_from_row(row, APPOINTMENT_COLUMNS))
