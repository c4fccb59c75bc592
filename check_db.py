# check_db.py
import asyncio
from taskstore.config import settings
from taskstore.core.errors import TaskStoreError
from taskstore.database import connect, ping, close

async def check_connection():
    try:
        engine = await connect(settings)
    except TaskStoreError as e:
        print("❌ Connection failed:", e)
        return
    try:
        await ping(engine)
        print("✅ Successfully connected to PostgreSQL!")
    except TaskStoreError as e:
        print("❌ Ping failed:", e)
    finally:
        await close(engine)

asyncio.run(check_connection())
