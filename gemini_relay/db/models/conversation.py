# gemini_relay/db/models/conversation.py
from sqlalchemy import Column, String, DateTime, Boolean, Integer
from datetime import datetime

from gemini_relay.db.base import Base


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Client-chosen, the only lookup key
    session_id = Column(String(255), unique=True, nullable=False, index=True)
    user_id = Column(String(255), nullable=True)
    title = Column(String(200), nullable=False, default="New Chat")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    # Declared for compatibility; nothing sets it
    is_deleted = Column(Boolean, default=False, nullable=False)
