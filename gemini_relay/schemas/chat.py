# gemini_relay/schemas/chat.py
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from gemini_relay.schemas.common import UtcDatetime


class ChatRequest(BaseModel):
    # Required-ness is checked by the orchestrator so a missing field is a 400
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")
    message: Optional[str] = None
    attachments: Optional[List[Union[int, str, None]]] = None


class ChatReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    message_id: int = Field(..., alias="messageId")
    role: str
    content: str
    created_at: UtcDatetime = Field(..., alias="createdAt")
