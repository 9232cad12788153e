import asyncio
import sys

from gemini_relay.core.config import settings
from gemini_relay.db.base import Base
from gemini_relay.db.session import create_engine_and_sessionmaker
import gemini_relay.db.models  # noqa: F401


async def init_db(drop: bool = False):
    """Create the conversations, messages and attachments tables"""
    print(f"🔗 Connecting to: {settings.DATABASE_URL}")

    engine, _ = create_engine_and_sessionmaker(settings.DATABASE_URL)

    async with engine.begin() as conn:
        if drop:
            print("🗑️  Dropping existing tables...")
            await conn.run_sync(Base.metadata.drop_all)

        print("📦 Creating tables...")
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    print("✅ Database initialized")


if __name__ == "__main__":
    asyncio.run(init_db(drop="--drop" in sys.argv[1:]))
