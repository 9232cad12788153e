# gemini_relay/db/__init__.py
from gemini_relay.db.base import Base
from gemini_relay.db.session import get_db, create_engine_and_sessionmaker, create_tables
from gemini_relay.db.models import *

__all__ = [
    "Base",
    "get_db",
    "create_engine_and_sessionmaker",
    "create_tables",
]
