# gemini_relay/db/models/__init__.py
"""Database models"""
from gemini_relay.db.base import Base
from gemini_relay.db.models.conversation import Conversation
from gemini_relay.db.models.message import Message, ROLE_USER, ROLE_ASSISTANT, ROLE_EXTERNAL_AI, MESSAGE_ROLES
from gemini_relay.db.models.attachment import Attachment


__all__ = [
    "Base",
    "Conversation",
    "Message",
    "Attachment",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ROLE_EXTERNAL_AI",
    "MESSAGE_ROLES",
]
