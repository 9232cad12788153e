# gemini_relay/schemas/conversation.py
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from gemini_relay.schemas.common import UtcDatetime


class ConversationSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    title: str
    updated_at: UtcDatetime = Field(..., alias="updatedAt")
    message_count: int = Field(..., alias="messageCount")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    has_more: bool = Field(..., alias="hasMore")

    model_config = ConfigDict(populate_by_name=True)


class ConversationPage(BaseModel):
    list: List[ConversationSummary]
    pagination: Pagination


class AttachmentRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_id: int = Field(..., alias="fileId")
    file_name: str = Field(..., alias="fileName")
    url: str


class ThreadMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: int = Field(..., alias="messageId")
    role: str
    content: str
    attachments: List[AttachmentRef] = []
    created_at: UtcDatetime = Field(..., alias="createdAt")
