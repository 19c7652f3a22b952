"""In-memory storage. All mutations run under one lock."""
import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from agenda.errors import DuplicateSlot, SlotTaken
from agenda.schemas.appointment import AppointmentResponse, AppointmentStatus
from agenda.schemas.closure import ClosureResponse
from agenda.schemas.slot_block import SlotBlockResponse
from agenda.schemas.time_slot import TimeSlotResponse

from .base import Storage


def _new_id() -> str:
    return str(uuid.uuid4())


class MemoryStorage(Storage):
    """Dict-backed store for demos and tests."""

    def __init__(self):
        self._lock = threading.RLock()
        self._time_slots: Dict[str, TimeSlotResponse] = {}
        self._closures: Dict[str, ClosureResponse] = {}
        self._blocks: Dict[str, SlotBlockResponse] = {}
        self._appointments: Dict[str, AppointmentResponse] = {}

    # Time slots

    async def list_time_slots(self, active_only: bool = False) -> List[TimeSlotResponse]:
        with self._lock:
            slots = [s.model_copy() for s in self._time_slots.values() if s.is_active or not active_only]
        return sorted(slots, key=lambda s: s.slot_time)

    async def get_time_slot(self, slot_id: str) -> Optional[TimeSlotResponse]:
        with self._lock:
            slot = self._time_slots.get(slot_id)
            return slot.model_copy() if slot else None

    async def add_time_slot(self, slot_time: str, is_active: bool = True) -> TimeSlotResponse:
        with self._lock:
            if any(s.slot_time == slot_time for s in self._time_slots.values()):
                raise DuplicateSlot(slot_time)
            slot = TimeSlotResponse(id=_new_id(), slot_time=slot_time, is_active=is_active)
            self._time_slots[slot.id] = slot
            return slot.model_copy()

    async def update_time_slot(self, slot_id: str, changes: dict) -> Optional[TimeSlotResponse]:
        with self._lock:
            slot = self._time_slots.get(slot_id)
            if slot is None:
                return None
            new_time = changes.get("slot_time")
            if new_time is not None and any(
                s.slot_time == new_time and s.id != slot_id for s in self._time_slots.values()
            ):
                raise DuplicateSlot(new_time)
            updated = slot.model_copy(update=changes)
            self._time_slots[slot_id] = updated
            return updated.model_copy()

    async def delete_time_slot(self, slot_id: str) -> bool:
        with self._lock:
            return self._time_slots.pop(slot_id, None) is not None

    # Closures

    async def list_closures(self, active_only: bool = False) -> List[ClosureResponse]:
        with self._lock:
            return [c.model_copy() for c in self._closures.values() if c.is_active or not active_only]

    async def add_closure(self, fields: dict) -> ClosureResponse:
        with self._lock:
            closure = ClosureResponse(id=_new_id(), **fields)
            self._closures[closure.id] = closure
            return closure.model_copy()

    async def delete_closure(self, closure_id: str) -> bool:
        with self._lock:
            return self._closures.pop(closure_id, None) is not None

    # Slot blocks

    async def list_blocks(
        self,
        specific_date: Optional[str] = None,
        active_only: bool = True,
    ) -> List[SlotBlockResponse]:
        with self._lock:
            blocks = [
                b.model_copy()
                for b in self._blocks.values()
                if (specific_date is None or b.specific_date == specific_date)
                and (b.is_active or not active_only)
            ]
        return sorted(blocks, key=lambda b: (b.specific_date, b.start_time))

    async def add_block(self, fields: dict) -> SlotBlockResponse:
        with self._lock:
            block = SlotBlockResponse(id=_new_id(), **fields)
            self._blocks[block.id] = block
            return block.model_copy()

    async def delete_block(self, block_id: str) -> bool:
        with self._lock:
            return self._blocks.pop(block_id, None) is not None

    # Appointments

    def _occupant(self, date: str, time: str, exclude_id: Optional[str] = None) -> Optional[AppointmentResponse]:
        for appointment in self._appointments.values():
            if (
                appointment.date == date
                and appointment.time == time
                and appointment.status != AppointmentStatus.CANCELLED
                and appointment.id != exclude_id
            ):
                return appointment
        return None

    async def add_appointment(self, fields: dict) -> AppointmentResponse:
        with self._lock:
            record = AppointmentResponse(
                id=_new_id(),
                created_at=datetime.now(),
                **{"status": AppointmentStatus.CONFIRMED.value, **fields},
            )
            if record.status != AppointmentStatus.CANCELLED and self._occupant(record.date, record.time):
                raise SlotTaken(record.date, record.time)
            self._appointments[record.id] = record
            return record.model_copy()

    async def get_appointment(self, appointment_id: str) -> Optional[AppointmentResponse]:
        with self._lock:
            appointment = self._appointments.get(appointment_id)
            return appointment.model_copy() if appointment else None

    async def update_appointment(self, appointment_id: str, changes: dict) -> Optional[AppointmentResponse]:
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                return None
            updated = current.model_copy(update=changes)
            if updated.status != AppointmentStatus.CANCELLED and self._occupant(
                updated.date, updated.time, exclude_id=appointment_id
            ):
                raise SlotTaken(updated.date, updated.time)
            self._appointments[appointment_id] = updated
            return updated.model_copy()

    async def find_active_appointment(self, date: str, time: str) -> Optional[AppointmentResponse]:
        with self._lock:
            occupant = self._occupant(date, time)
            return occupant.model_copy() if occupant else None

    async def list_appointments(
        self,
        date: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[AppointmentResponse]:
        with self._lock:
            appointments = [
                a.model_copy()
                for a in self._appointments.values()
                if (date is None or a.date == date)
                and (start_date is None or a.date >= start_date)
                and (end_date is None or a.date <= end_date)
            ]
        return sorted(appointments, key=lambda a: (a.date, a.time))
