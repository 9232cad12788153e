import asyncio
from typing import Awaitable, Callable, List, TypeVar

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from gemini_relay.core.config import settings
from gemini_relay.core.exceptions import ExternalServiceError
from gemini_relay.db.session import create_engine_and_sessionmaker, create_tables
from gemini_relay.main import create_app
from gemini_relay.services.llm.base import BaseCompletionGateway

T = TypeVar("T")


class FakeGateway(BaseCompletionGateway):
    """Echoes the prompt back; flip `fail` to simulate a provider outage"""

    model_name = "gemini-test"

    def __init__(self):
        self.prompts: List[str] = []
        self.fail = False
        self.reply_prefix = "echo: "
        self.delay = 0.0

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ExternalServiceError() from RuntimeError("upstream secret 503")
        return f"{self.reply_prefix}{prompt}"


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def test_settings(tmp_path, monkeypatch):
    db_path = tmp_path / "relay.db"
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "http://files.test")
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", True)
    return settings


@pytest.fixture
def client(test_settings, fake_gateway):
    app = create_app(gateway_factory=lambda: fake_gateway)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_db(test_settings) -> Callable[[Callable[..., Awaitable[T]]], T]:
    """Run an async scenario against a fresh store: scenario(session_factory)"""

    def runner(scenario):
        async def main():
            engine, session_factory = create_engine_and_sessionmaker(test_settings.DATABASE_URL)
            await create_tables(engine)
            try:
                return await scenario(session_factory)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return runner


@pytest.fixture
def count_rows(test_settings):
    """Synchronous row count straight from the SQLite file"""

    def counter(table: str) -> int:
        url = test_settings.DATABASE_URL.replace("sqlite+aiosqlite", "sqlite")
        engine = create_engine(url)
        try:
            with engine.connect() as conn:
                return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
        finally:
            engine.dispose()

    return counter
