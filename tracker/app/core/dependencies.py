"""
Service dependencies for FastAPI.

Builds a store and service per request around the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from tracker.app.db.session import get_db
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore


async def get_parcel_store(db: AsyncSession = Depends(get_db)) -> ParcelStore:
    return ParcelStore(db)


async def get_parcel_service(store: ParcelStore = Depends(get_parcel_store)) -> ParcelService:
    return ParcelService(store)
