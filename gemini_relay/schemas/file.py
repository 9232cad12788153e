# gemini_relay/schemas/file.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from gemini_relay.schemas.common import UtcDatetime


class FileUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_id: int = Field(..., alias="fileId")
    file_name: str = Field(..., alias="fileName")
    file_type: str = Field(..., alias="fileType")
    file_size: int = Field(..., alias="fileSize")
    url: str


class FileInfo(FileUploadResponse):
    session_id: Optional[str] = Field(None, alias="sessionId")
    message_id: Optional[int] = Field(None, alias="messageId")
    uploaded_at: UtcDatetime = Field(..., alias="uploadedAt")
