# gemini_relay/db/session.py
from typing import AsyncIterator, Tuple

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from gemini_relay.core.config import settings
from gemini_relay.db.base import Base


def create_engine_and_sessionmaker(database_url: str) -> Tuple[AsyncEngine, async_sessionmaker]:
    """
    Build the process-wide engine and session factory.
    Called once on startup; the caller owns disposal.
    """
    engine_kwargs = {
        "echo": settings.LOG_LEVEL == "DEBUG",  # Enable SQL logging in debug mode
        "future": True,
        "pool_pre_ping": True,  # Verify connections before using
    }
    if not database_url.startswith("sqlite"):
        engine_kwargs.update(pool_size=10, max_overflow=20)

    engine = create_async_engine(database_url, **engine_kwargs)

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False
    )
    return engine, session_factory


async def create_tables(engine: AsyncEngine) -> None:
    # Import models so they register on Base.metadata
    import gemini_relay.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency function that provides a database session
    from the factory opened in the application lifespan
    """
    session_factory: async_sessionmaker = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
