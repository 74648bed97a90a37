"""
Parcel database model.

One row per tracked parcel. Status and created_at are stored verbatim as
strings; the table never normalizes what callers hand to the store.
"""

from sqlalchemy import Column, Integer, String
from tracker.app.db.session import Base


class ParcelRecord(Base):
    """
    Persisted parcel row.
    
    `number` is assigned by the database on insert and never changes.
    `created_at` holds an RFC 3339 UTC timestamp string.
    """
    __tablename__ = "parcel"
    
    number = Column(Integer, primary_key=True, autoincrement=True)
    
    # Ownership - opaque client identifier, not validated
    client = Column(Integer, nullable=False, index=True)
    
    # Lifecycle
    status = Column(String(32), nullable=False)
    address = Column(String(500), nullable=False)
    
    # Timestamps
    created_at = Column(String(64), nullable=False)
    
    def __repr__(self):
        return f"<ParcelRecord(number={self.number}, client={self.client}, status='{self.status}')>"
