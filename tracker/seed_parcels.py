"""
Demo seeding script for parcels.

Walks one client's parcels through their lifecycle against the configured
database: register, re-address, advance status, list, then register and
delete a second parcel.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracker.app.db.session import AsyncSessionLocal, engine, init_models
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore

DEMO_CLIENT = 1


def print_parcels(parcels):
    print(f"📦 Client {DEMO_CLIENT} parcels:")
    for parcel in parcels:
        print(
            f"   #{parcel.number}: {parcel.address} "
            f"[{parcel.status.value}] created {parcel.created_at}"
        )


async def seed_parcels():
    """
    Run the parcel lifecycle demo.
    
    Creates:
    - 1 parcel that ends up SENT at its corrected address
    - 1 parcel that is registered and then deleted
    """
    await init_models()
    
    async with AsyncSessionLocal() as db:
        service = ParcelService(ParcelStore(db))
        print("🌱 Starting parcel seeding...")
        
        parcel = await service.register(DEMO_CLIENT, "Pskov, d. Pushkina, ul. Kolotushkina, d. 5")
        print(f"✅ Registered parcel #{parcel.number} at {parcel.created_at}")
        
        parcel = await service.change_address(parcel.number, "Saratov, d. Verkhniye Zori, ul. Nizhnyaya, d. 1")
        print(f"✅ Parcel #{parcel.number} re-addressed to {parcel.address}")
        
        parcel = await service.next_status(parcel.number)
        print(f"✅ Parcel #{parcel.number} is now {parcel.status.value}")
        
        print_parcels(await service.client_parcels(DEMO_CLIENT))
        
        doomed = await service.register(DEMO_CLIENT, "Pskov, d. Pushkina, ul. Kolotushkina, d. 5")
        print(f"✅ Registered parcel #{doomed.number}")
        
        await service.delete(doomed.number)
        print(f"🗑️  Deleted parcel #{doomed.number}")
        
        print_parcels(await service.client_parcels(DEMO_CLIENT))
        print("\n🎉 Parcel seeding complete!")
    
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_parcels())
