"""
Parcel Pydantic schemas.

`Parcel` is the in-memory parcel value the store reads and writes; the rest
are request and response models for the HTTP API.
"""

from datetime import datetime, timezone
from typing import List
from pydantic import BaseModel, Field
from tracker.app.models.parcel_enums import ParcelStatus

RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"

# Bounds of a signed 64-bit INTEGER column
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


def utc_now_rfc3339() -> str:
    """Current UTC time as an RFC 3339 string with second precision."""
    return datetime.now(timezone.utc).strftime(RFC3339_UTC)


class Parcel(BaseModel):
    """A tracked shipment. number == 0 means not yet persisted."""
    number: int = Field(default=0, ge=0, description="Store-assigned parcel number")
    client: int = Field(..., description="Owning client identifier")
    status: ParcelStatus = Field(..., description="Lifecycle status")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(..., description="Creation time, RFC 3339 UTC")
    
    class Config:
        from_attributes = True


class ParcelCreate(BaseModel):
    """Schema for registering a new parcel."""
    client: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="Owning client identifier")
    address: str = Field(..., min_length=1, max_length=500, description="Delivery address")


class ParcelAddressUpdate(BaseModel):
    """Schema for changing the delivery address of a parcel."""
    address: str = Field(..., min_length=1, max_length=500)


class ParcelListResponse(BaseModel):
    """Schema for a client's parcels."""
    parcels: List[Parcel]
    total: int
