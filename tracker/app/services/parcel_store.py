"""
Parcel record store.

CRUD access to the parcel table over an externally owned AsyncSession.
Each operation issues exactly one statement, and writes are committed
immediately; the store keeps no state of its own and performs no
validation or status transitions.
"""

import logging
from typing import List, NoReturn

from pydantic import ValidationError

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.app.core.exceptions import ParcelNotFoundError, StorageError
from tracker.app.models.parcel import ParcelRecord
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import Parcel

logger = logging.getLogger("tracker.store")

parcel_table = ParcelRecord.__table__


def _status_value(status: ParcelStatus) -> str:
    # Unknown values raise ValueError here, before any statement is issued
    return ParcelStatus(status).value


class ParcelStore:
    """
    Durable CRUD access to parcel records.
    
    Args:
        db: An open session on an already-migrated database. The store never
            opens, closes or migrates it.
    """
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def _execute(self, operation: str, statement):
        try:
            return await self.db.execute(statement)
        except (SQLAlchemyError, OverflowError) as exc:
            # OverflowError: the driver cannot bind integers outside 64 bits
            await self._fail(operation, exc)
    
    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail(operation, exc)
    
    async def _fail(self, operation: str, exc: Exception) -> NoReturn:
        logger.warning("Parcel %s failed: %s", operation, exc)
        await self.db.rollback()
        raise StorageError(operation, exc) from exc
    
    async def _to_parcel(self, operation: str, row) -> Parcel:
        try:
            return Parcel.model_validate(dict(row._mapping))
        except ValidationError as exc:
            # A row written outside this store, e.g. with an unknown status
            await self._fail(operation, exc)
    
    async def add(self, parcel: Parcel) -> int:
        """
        Persist a new parcel and return its assigned number.
        
        parcel.number is ignored; every other field is written verbatim.
        """
        statement = insert(parcel_table).values(
            client=parcel.client,
            status=_status_value(parcel.status),
            address=parcel.address,
            created_at=parcel.created_at,
        )
        result = await self._execute("add", statement)
        number = result.inserted_primary_key[0]
        await self._commit("add")
        logger.debug("Added parcel %s for client %s", number, parcel.client)
        return number
    
    async def get(self, number: int) -> Parcel:
        """
        Fetch one parcel by number.
        
        Raises:
            ParcelNotFoundError: no row exists for number
            StorageError: the row cannot be read back as a Parcel
        """
        statement = select(parcel_table).where(parcel_table.c.number == number)
        result = await self._execute("get", statement)
        row = result.first()
        if row is None:
            raise ParcelNotFoundError(number)
        return await self._to_parcel("get", row)
    
    async def get_by_client(self, client: int) -> List[Parcel]:
        """Return every parcel owned by client, in no particular order."""
        statement = select(parcel_table).where(parcel_table.c.client == client)
        result = await self._execute("get_by_client", statement)
        return [await self._to_parcel("get_by_client", row) for row in result.all()]
    
    async def delete(self, number: int) -> None:
        """Permanently remove a parcel. Deleting a missing number is a no-op."""
        statement = delete(parcel_table).where(parcel_table.c.number == number)
        result = await self._execute("delete", statement)
        removed = result.rowcount
        await self._commit("delete")
        if removed == 0:
            logger.debug("Delete of parcel %s matched no rows", number)
    
    async def set_address(self, number: int, address: str) -> None:
        """
        Replace the delivery address of a parcel.
        
        Raises:
            ParcelNotFoundError: no row exists for number
        """
        statement = (
            update(parcel_table)
            .where(parcel_table.c.number == number)
            .values(address=address)
        )
        await self._update("set_address", number, statement)
    
    async def set_status(self, number: int, status: ParcelStatus) -> None:
        """
        Overwrite the status of a parcel. No transition rules are checked.
        
        Raises:
            ParcelNotFoundError: no row exists for number
        """
        statement = (
            update(parcel_table)
            .where(parcel_table.c.number == number)
            .values(status=_status_value(status))
        )
        await self._update("set_status", number, statement)
    
    async def _update(self, operation: str, number: int, statement) -> None:
        # rowcount counts matched rows, so re-writing the current value still reports 1
        result = await self._execute(operation, statement)
        matched = result.rowcount
        await self._commit(operation)
        if matched == 0:
            raise ParcelNotFoundError(number)
        logger.debug("Parcel %s: %s applied", number, operation)
