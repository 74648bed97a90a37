import asyncio
import sys

from dotenv import load_dotenv

# Load env vars before settings are read
load_dotenv(".env")

from sqlalchemy import func, select, text

from tracker.app.core.config import settings
from tracker.app.db.session import build_engine
from tracker.app.services.parcel_store import parcel_table

print(f"Testing connection to: {settings.database_url}")


async def check_db():
    engine = build_engine(settings.database_url)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            print("✅ Connection Successful!")
            try:
                count = (await conn.execute(select(func.count()).select_from(parcel_table))).scalar()
                print(f"📦 Parcel table present with {count} rows")
            except Exception as e:
                print(f"⚠️ Parcel table not available: {e}")
        return 0
    except Exception as e:
        print(f"❌ Connection Failed: {e}")
        return 1
    finally:
        await engine.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(check_db()))
