"""
Parcel lifecycle service.

Holds the status rules that the store deliberately does not enforce:
parcels move registered → sent → delivered, and only registered parcels may
have their address changed or be deleted.

Status checks and writes are separate statements with no shared
transaction, so a concurrent next_status can land between the check in
change_address or delete and its write; the check is best effort.
"""

import logging
from typing import List

from tracker.app.core.exceptions import InvalidParcelStateError
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import Parcel, utc_now_rfc3339
from tracker.app.services.parcel_store import ParcelStore

logger = logging.getLogger("tracker.service")

NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}


class ParcelService:
    
    def __init__(self, store: ParcelStore):
        self.store = store
    
    async def register(self, client: int, address: str) -> Parcel:
        """
        Register a new parcel for a client.
        
        Args:
            client: Owning client identifier
            address: Delivery address
            
        Returns:
            The persisted parcel, including its assigned number
        """
        parcel = Parcel(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address,
            created_at=utc_now_rfc3339(),
        )
        parcel.number = await self.store.add(parcel)
        logger.info(
            "Parcel %s registered for client %s to %s at %s",
            parcel.number, client, address, parcel.created_at
        )
        return parcel
    
    async def client_parcels(self, client: int) -> List[Parcel]:
        return await self.store.get_by_client(client)
    
    async def next_status(self, number: int) -> Parcel:
        """
        Advance a parcel one step along its lifecycle.
        
        Delivered parcels are returned unchanged.
        """
        parcel = await self.store.get(number)
        next_status = NEXT_STATUS.get(parcel.status)
        if next_status is None:
            return parcel
        
        await self.store.set_status(number, next_status)
        logger.info("Parcel %s status: %s → %s", number, parcel.status.value, next_status.value)
        parcel.status = next_status
        return parcel
    
    async def change_address(self, number: int, address: str) -> Parcel:
        """
        Change the delivery address of a registered parcel.
        
        The status is read before the write, not atomically with it.
        
        Raises:
            ParcelNotFoundError: parcel does not exist
            InvalidParcelStateError: parcel has already been sent
        """
        parcel = await self.store.get(number)
        self._require_registered(parcel, "change address of")
        
        await self.store.set_address(number, address)
        logger.info("Parcel %s address changed to %s", number, address)
        parcel.address = address
        return parcel
    
    async def delete(self, number: int) -> None:
        """
        Delete a registered parcel.
        
        The status is read before the write, not atomically with it.
        
        Raises:
            ParcelNotFoundError: parcel does not exist
            InvalidParcelStateError: parcel has already been sent
        """
        parcel = await self.store.get(number)
        self._require_registered(parcel, "delete")
        
        await self.store.delete(number)
        logger.info("Parcel %s deleted", number)
    
    @staticmethod
    def _require_registered(parcel: Parcel, action: str) -> None:
        if parcel.status != ParcelStatus.REGISTERED:
            raise InvalidParcelStateError(parcel.number, parcel.status.value, action)
