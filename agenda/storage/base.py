"""
Storage port used by the booking services.

Implementations own all entities. Every call reads current state; nothing is
cached between calls. Implementations must enforce, atomically, that at most
one non-cancelled appointment exists per (date, time) and raise SlotTaken
otherwise; services rely on this guard to stay correct under concurrent
bookings.
"""
import abc
from typing import List, Optional

from agenda.schemas.appointment import AppointmentResponse
from agenda.schemas.closure import ClosureResponse
from agenda.schemas.slot_block import SlotBlockResponse
from agenda.schemas.time_slot import TimeSlotResponse


class Storage(abc.ABC):
    """Abstract key-indexed store for the schedule and the appointment ledger."""

    # Time slots

    @abc.abstractmethod
    async def list_time_slots(self, active_only: bool = False) -> List[TimeSlotResponse]:
        """Slots ordered by slot_time."""

    @abc.abstractmethod
    async def get_time_slot(self, slot_id: str) -> Optional[TimeSlotResponse]:
        ...

    @abc.abstractmethod
    async def add_time_slot(self, slot_time: str, is_active: bool = True) -> TimeSlotResponse:
        """Raises DuplicateSlot if slot_time is already used."""

    @abc.abstractmethod
    async def update_time_slot(self, slot_id: str, changes: dict) -> Optional[TimeSlotResponse]:
        """None if the slot does not exist. Raises DuplicateSlot on a taken slot_time."""

    @abc.abstractmethod
    async def delete_time_slot(self, slot_id: str) -> bool:
        ...

    # Closures

    @abc.abstractmethod
    async def list_closures(self, active_only: bool = False) -> List[ClosureResponse]:
        ...

    @abc.abstractmethod
    async def add_closure(self, fields: dict) -> ClosureResponse:
        ...

    @abc.abstractmethod
    async def delete_closure(self, closure_id: str) -> bool:
        ...

    # Slot blocks

    @abc.abstractmethod
    async def list_blocks(
        self,
        specific_date: Optional[str] = None,
        active_only: bool = True,
    ) -> List[SlotBlockResponse]:
        """Blocks ordered by date, then start_time."""

    @abc.abstractmethod
    async def add_block(self, fields: dict) -> SlotBlockResponse:
        ...

    @abc.abstractmethod
    async def delete_block(self, block_id: str) -> bool:
        ...

    # Appointments

    @abc.abstractmethod
    async def add_appointment(self, fields: dict) -> AppointmentResponse:
        """Insert with status "confirmed" unless given. Raises SlotTaken."""

    @abc.abstractmethod
    async def get_appointment(self, appointment_id: str) -> Optional[AppointmentResponse]:
        ...

    @abc.abstractmethod
    async def update_appointment(self, appointment_id: str, changes: dict) -> Optional[AppointmentResponse]:
        """None if unknown. Raises SlotTaken if the result would double-book."""

    @abc.abstractmethod
    async def find_active_appointment(self, date: str, time: str) -> Optional[AppointmentResponse]:
        """Non-cancelled appointment holding (date, time), if any."""

    @abc.abstractmethod
    async def list_appointments(
        self,
        date: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[AppointmentResponse]:
        """Appointments of any status ordered by date, then time. Bounds are inclusive."""
