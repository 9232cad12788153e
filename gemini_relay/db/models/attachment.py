# gemini_relay/db/models/attachment.py
from sqlalchemy import Column, String, DateTime, Integer
from datetime import datetime

from gemini_relay.db.base import Base


class Attachment(Base):
    __tablename__ = "attachments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(255), nullable=True, index=True)
    # Upload precedes the message, so this stays empty for orphans
    message_id = Column(Integer, nullable=True)
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False)
    file_path = Column(String(500), nullable=False)  # /uploads/<stored name>
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)
