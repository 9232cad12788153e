# gemini_relay/db/models/message.py
from sqlalchemy import Column, String, DateTime, Text, Integer, JSON, Index
from datetime import datetime

from gemini_relay.db.base import Base

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_EXTERNAL_AI = "gemini3"
MESSAGE_ROLES = (ROLE_USER, ROLE_ASSISTANT, ROLE_EXTERNAL_AI)


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_session_created", "session_id", "created_at"),
    )

    # Autoincrement id doubles as the tie-breaker for equal created_at
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Plain value reference, no foreign key to conversations
    session_id = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # user, assistant, gemini3
    content = Column(Text, nullable=False, default="")
    # Attachment ids exactly as the client sent them
    attachment_ids = Column(JSON, nullable=False, default=list)
    sender_ai = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
