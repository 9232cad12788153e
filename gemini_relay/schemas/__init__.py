# gemini_relay/schemas/__init__.py
from gemini_relay.schemas.chat import ChatRequest, ChatReply
from gemini_relay.schemas.conversation import (
    ConversationSummary, Pagination, ConversationPage,
    AttachmentRef, ThreadMessage
)
from gemini_relay.schemas.file import FileUploadResponse, FileInfo
from gemini_relay.schemas.common import HealthCheck, ok

__all__ = [
    # Chat
    "ChatRequest", "ChatReply",
    # Conversation
    "ConversationSummary", "Pagination", "ConversationPage",
    "AttachmentRef", "ThreadMessage",
    # File
    "FileUploadResponse", "FileInfo",
    # Common
    "HealthCheck", "ok"
]
