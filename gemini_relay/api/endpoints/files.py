"""
File endpoints: upload and lookup
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.core.exceptions import InternalError, RelayError, ValidationError
from gemini_relay.db.session import get_db
from gemini_relay.schemas import ok
from gemini_relay.services import file as file_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/upload")
async def upload_file(
        file: Optional[UploadFile] = File(None),
        session_id: Optional[str] = Form(None, alias="sessionId"),
        db: AsyncSession = Depends(get_db)
):
    """
    Upload a single file

    Args:
        file: Multipart field `file`
        session_id: Optional session the file belongs to
        db: Database session

    Returns:
        Envelope with fileId, fileName, fileType, fileSize and url
    """
    if file is None or not file.filename:
        raise ValidationError("Please upload a file")

    mime_type = file.content_type or ""
    # Reject on declared size before reading the body
    file_service.check_upload(mime_type, file.size)

    logger.info(f"📤 Uploading file: {file.filename} ({mime_type})")
    try:
        content = await file.read()
        result = await file_service.upload(
            db,
            original_name=file.filename,
            mime_type=mime_type,
            content=content,
            session_id=session_id
        )
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"❌ Upload failed: {e}", exc_info=True)
        raise InternalError("Upload failed") from e
    finally:
        await file.close()

    return ok(result.model_dump(by_alias=True, mode="json"), msg="Upload succeeded")


@router.get("/files/{file_id}")
async def get_file(
        file_id: str,
        db: AsyncSession = Depends(get_db)
):
    """Get attachment metadata by id"""
    info = await file_service.get_attachment(db, file_id=file_id)
    return ok(info.model_dump(by_alias=True, mode="json"))
