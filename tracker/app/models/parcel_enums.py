"""
Parcel Status Enumeration.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.
    
    Status flow (driven by ParcelService, never by the store):
        REGISTERED → SENT → DELIVERED
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"
