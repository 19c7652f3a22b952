"""
SQLAlchemy storage.

Each call runs in its own session and transaction. Double booking is
prevented by the partial unique index on appointments(date, time); an
IntegrityError from it becomes SlotTaken.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, List, Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agenda.errors import DuplicateSlot, SlotTaken, StoreUnavailable
from agenda.models.schedule_models import (
    Appointment,
    ScheduleClosure,
    TimeSlot,
    TimeSlotBlock,
    generate_id,
)
from agenda.schemas.appointment import AppointmentResponse, AppointmentStatus
from agenda.schemas.closure import ClosureResponse
from agenda.schemas.slot_block import SlotBlockResponse
from agenda.schemas.time_slot import TimeSlotResponse

from . import mapping
from .base import Storage

logger = logging.getLogger(__name__)


def _is_missing_table(exc: Optional[BaseException], table_name: str) -> bool:
    """True when the driver reports that ``table_name`` does not exist."""
    if not isinstance(exc, (OperationalError, ProgrammingError)):
        return False
    message = str(exc).lower()
    return table_name in message and ("no such table" in message or "does not exist" in message)


class SqlStorage(Storage):
    """Storage backed by an async SQLAlchemy session factory."""

    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    yield session
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"Storage is unavailable: {e.__class__.__name__}") from e

    # Time slots

    async def list_time_slots(self, active_only: bool = False) -> List[TimeSlotResponse]:
        query = select(TimeSlot)
        if active_only:
            query = query.where(TimeSlot.is_active == True)
        query = query.order_by(TimeSlot.slot_time)

        async with self._transaction() as session:
            result = await session.execute(query)
            return [mapping.time_slot_from_row(row) for row in result.scalars().all()]

    async def get_time_slot(self, slot_id: str) -> Optional[TimeSlotResponse]:
        async with self._transaction() as session:
            row = await session.get(TimeSlot, slot_id)
            return mapping.time_slot_from_row(row) if row else None

    async def add_time_slot(self, slot_time: str, is_active: bool = True) -> TimeSlotResponse:
        try:
            async with self._transaction() as session:
                row = TimeSlot(id=generate_id(), slot_time=slot_time, is_active=is_active)
                session.add(row)
                await session.flush()
                slot = mapping.time_slot_from_row(row)
        except IntegrityError as e:
            raise DuplicateSlot(slot_time) from e
        return slot

    async def update_time_slot(self, slot_id: str, changes: dict) -> Optional[TimeSlotResponse]:
        columns = mapping.to_columns(changes, mapping.TIME_SLOT_COLUMNS)
        try:
            async with self._transaction() as session:
                row = await session.get(TimeSlot, slot_id)
                if row is None:
                    return None
                for column, value in columns.items():
                    setattr(row, column, value)
                await session.flush()
                slot = mapping.time_slot_from_row(row)
        except IntegrityError as e:
            raise DuplicateSlot(changes.get("slot_time", "")) from e
        return slot

    async def delete_time_slot(self, slot_id: str) -> bool:
        async with self._transaction() as session:
            result = await session.execute(delete(TimeSlot).where(TimeSlot.id == slot_id))
            return result.rowcount > 0

    # Closures

    async def list_closures(self, active_only: bool = False) -> List[ClosureResponse]:
        query = select(ScheduleClosure)
        if active_only:
            query = query.where(ScheduleClosure.is_active == True)
        query = query.order_by(ScheduleClosure.created_at)

        async with self._transaction() as session:
            result = await session.execute(query)
            return [mapping.closure_from_row(row) for row in result.scalars().all()]

    async def add_closure(self, fields: dict) -> ClosureResponse:
        columns = mapping.to_columns(fields, mapping.CLOSURE_COLUMNS)
        async with self._transaction() as session:
            row = ScheduleClosure(id=generate_id(), created_at=datetime.now(), **columns)
            session.add(row)
            await session.flush()
            return mapping.closure_from_row(row)

    async def delete_closure(self, closure_id: str) -> bool:
        async with self._transaction() as session:
            result = await session.execute(delete(ScheduleClosure).where(ScheduleClosure.id == closure_id))
            return result.rowcount > 0

    # Slot blocks

    async def list_blocks(
        self,
        specific_date: Optional[str] = None,
        active_only: bool = True,
    ) -> List[SlotBlockResponse]:
        query = select(TimeSlotBlock)
        if specific_date is not None:
            query = query.where(TimeSlotBlock.specific_date == specific_date)
        if active_only:
            query = query.where(TimeSlotBlock.is_active == True)
        query = query.order_by(TimeSlotBlock.specific_date, TimeSlotBlock.start_time)

        try:
            async with self._transaction() as session:
                result = await session.execute(query)
                return [mapping.block_from_row(row) for row in result.scalars().all()]
        except StoreUnavailable as e:
            # Blocks are an optional extension: an unprovisioned table means "no blocks"
            if _is_missing_table(e.__cause__, TimeSlotBlock.__tablename__):
                logger.warning(f"⚠️ Table {TimeSlotBlock.__tablename__} is missing, treating as no blocks")
                return []
            raise

    async def add_block(self, fields: dict) -> SlotBlockResponse:
        columns = mapping.to_columns(fields, mapping.BLOCK_COLUMNS)
        async with self._transaction() as session:
            row = TimeSlotBlock(id=generate_id(), created_at=datetime.now(), **columns)
            session.add(row)
            await session.flush()
            return mapping.block_from_row(row)

    async def delete_block(self, block_id: str) -> bool:
        async with self._transaction() as session:
            result = await session.execute(delete(TimeSlotBlock).where(TimeSlotBlock.id == block_id))
            return result.rowcount > 0

    # Appointments

    @staticmethod
    async def _occupant(
        session: AsyncSession,
        date: str,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Appointment]:
        conditions = [
            Appointment.date == date,
            Appointment.time == time,
            Appointment.status != AppointmentStatus.CANCELLED.value,
        ]
        if exclude_id is not None:
            conditions.append(Appointment.id != exclude_id)
        result = await session.execute(select(Appointment).where(and_(*conditions)).limit(1))
        return result.scalar_one_or_none()

    async def add_appointment(self, fields: dict) -> AppointmentResponse:
        columns = mapping.to_columns(fields, mapping.APPOINTMENT_COLUMNS)
        columns.setdefault("status", AppointmentStatus.CONFIRMED.value)
        date, time = columns["date"], columns["time"]
        try:
            async with self._transaction() as session:
                if columns["status"] != AppointmentStatus.CANCELLED.value and await self._occupant(session, date, time):
                    raise SlotTaken(date, time)
                row = Appointment(id=generate_id(), created_at=datetime.now(), **columns)
                session.add(row)
                await session.flush()
                appointment = mapping.appointment_from_row(row)
        except IntegrityError as e:
            # Lost a race against a concurrent booking for the same slot
            raise SlotTaken(date, time) from e
        return appointment

    async def get_appointment(self, appointment_id: str) -> Optional[AppointmentResponse]:
        async with self._transaction() as session:
            row = await session.get(Appointment, appointment_id)
            return mapping.appointment_from_row(row) if row else None

    async def update_appointment(self, appointment_id: str, changes: dict) -> Optional[AppointmentResponse]:
        columns = mapping.to_columns(changes, mapping.APPOINTMENT_COLUMNS)
        date = time = None
        try:
            async with self._transaction() as session:
                row = await session.get(Appointment, appointment_id)
                if row is None:
                    return None
                for column, value in columns.items():
                    setattr(row, column, value)
                date, time = row.date, row.time
                if row.status != AppointmentStatus.CANCELLED.value and await self._occupant(
                    session, date, time, exclude_id=appointment_id
                ):
                    raise SlotTaken(date, time)
                await session.flush()
                appointment = mapping.appointment_from_row(row)
        except IntegrityError as e:
            raise SlotTaken(date, time) from e
        return appointment

    async def find_active_appointment(self, date: str, time: str) -> Optional[AppointmentResponse]:
        async with self._transaction() as session:
            row = await self._occupant(session, date, time)
            return mapping.appointment_from_row(row) if row else None

    async def list_appointments(
        self,
        date: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[AppointmentResponse]:
        query = select(Appointment)
        if date is not None:
            query = query.where(Appointment.date == date)
        if start_date is not None:
            query = query.where(Appointment.date >= start_date)
        if end_date is not None:
            query = query.where(Appointment.date <= end_date)
        query = query.order_by(Appointment.date, Appointment.time)

        async with self._transaction() as session:
            result = await session.execute(query)
            return [mapping.appointment_from_row(row) for row in result.scalars().all()]
