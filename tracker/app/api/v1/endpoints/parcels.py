"""
Parcel API Endpoints.

Registration, lookup and lifecycle changes for tracked parcels.
"""

from fastapi import APIRouter, Depends, Path, Response, status
from tracker.app.core.dependencies import get_parcel_service, get_parcel_store
from tracker.app.schemas.parcel import (
    INT64_MAX, INT64_MIN, Parcel, ParcelAddressUpdate, ParcelCreate, ParcelListResponse
)
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore

router = APIRouter(tags=["Parcels"])


@router.post("/parcels", response_model=Parcel, status_code=status.HTTP_201_CREATED)
async def register_parcel(
    parcel_data: ParcelCreate,
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Register a new parcel.
    
    The parcel starts in status "registered" with created_at set to now (UTC).
    """
    return await service.register(parcel_data.client, parcel_data.address)


@router.get("/parcels/{number}", response_model=Parcel)
async def get_parcel(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    store: ParcelStore = Depends(get_parcel_store)
):
    """Get a parcel by number. Returns 404 if it does not exist."""
    return await store.get(number)


@router.get("/clients/{client}/parcels", response_model=ParcelListResponse)
async def list_client_parcels(
    client: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Client ID"),
    service: ParcelService = Depends(get_parcel_service)
):
    """List all parcels owned by a client. Order is not guaranteed."""
    parcels = await service.client_parcels(client)
    return ParcelListResponse(parcels=parcels, total=len(parcels))


@router.patch("/parcels/{number}/address", response_model=Parcel)
async def change_parcel_address(
    address_data: ParcelAddressUpdate,
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Change the delivery address.
    
    Only registered parcels can be re-addressed (409 otherwise).
    """
    return await service.change_address(number, address_data.address)


@router.post("/parcels/{number}/next-status", response_model=Parcel)
async def advance_parcel_status(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Move a parcel to its next status. Delivered parcels are left as is."""
    return await service.next_status(number)


@router.delete("/parcels/{number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parcel(
    number: int = Path(..., ge=1, le=INT64_MAX, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Delete a parcel.
    
    Only registered parcels can be deleted (409 otherwise).
    """
    await service.delete(number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
