"""
Attachment registrar
Validates an upload, writes it to the upload directory and records its metadata
"""
import logging
import os
import time
from pathlib import Path
from typing import Optional

import aiofiles
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.core.config import settings
from gemini_relay.core.exceptions import NotFoundError, PayloadTooLargeError, UnsupportedFormatError
from gemini_relay.crud import crud_attachment
from gemini_relay.crud.attachment import coerce_attachment_id
from gemini_relay.db.models import Attachment
from gemini_relay.schemas.file import FileInfo, FileUploadResponse

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


def check_upload(mime_type: Optional[str], size_bytes: Optional[int]) -> None:
    """Reject before anything is written to storage"""
    if not settings.is_mime_type_supported(mime_type or ""):
        raise UnsupportedFormatError()
    if size_bytes is not None and size_bytes > settings.max_filesize_bytes:
        raise PayloadTooLargeError(f"File too large (max {settings.MAX_FILESIZE_MB}MB)")


def stored_name(original_name: str) -> str:
    return f"{int(time.time() * 1000)}-{Path(original_name).name}"


async def save_upload(original_name: str, content: bytes) -> str:
    """Write bytes to the upload directory, return the public path"""
    name = stored_name(original_name)
    target = settings.get_upload_dir() / name
    async with aiofiles.open(target, "wb") as f:
        await f.write(content)
    logger.info(f"✅ File saved to disk: {target}")
    return f"{PUBLIC_PREFIX}/{name}"


def _remove_stored(public_path: str) -> None:
    target = settings.get_upload_dir() / public_path.rsplit("/", 1)[-1]
    if os.path.exists(target):
        os.remove(target)


async def register(
        db: AsyncSession,
        *,
        original_name: str,
        mime_type: str,
        size_bytes: int,
        storage_path: str,
        session_id: Optional[str] = None
) -> FileUploadResponse:
    """Record an already stored file and return its id and public url"""
    attachment = await crud_attachment.create_attachment(
        db,
        session_id=session_id or None,
        file_name=original_name,
        file_type=mime_type,
        file_size=size_bytes,
        file_path=storage_path
    )
    logger.info(f"✅ Attachment record created: {attachment.id}")
    return FileUploadResponse(
        file_id=attachment.id,
        file_name=attachment.file_name,
        file_type=attachment.file_type,
        file_size=attachment.file_size,
        url=settings.public_url(attachment.file_path)
    )


async def upload(
        db: AsyncSession,
        *,
        original_name: str,
        mime_type: str,
        content: bytes,
        session_id: Optional[str] = None
) -> FileUploadResponse:
    check_upload(mime_type, len(content))
    storage_path = await save_upload(original_name, content)
    try:
        return await register(
            db,
            original_name=original_name,
            mime_type=mime_type,
            size_bytes=len(content),
            storage_path=storage_path,
            session_id=session_id
        )
    except Exception:
        _remove_stored(storage_path)
        raise


def _to_info(attachment: Attachment) -> FileInfo:
    return FileInfo(
        file_id=attachment.id,
        file_name=attachment.file_name,
        file_type=attachment.file_type,
        file_size=attachment.file_size,
        url=settings.public_url(attachment.file_path),
        session_id=attachment.session_id,
        message_id=attachment.message_id,
        uploaded_at=attachment.uploaded_at
    )


async def get_attachment(db: AsyncSession, *, file_id) -> FileInfo:
    """Attachment by id, whether or not a message owns it"""
    key = coerce_attachment_id(file_id)
    attachment = await crud_attachment.get(db, key) if key is not None else None
    if attachment is None:
        raise NotFoundError("File not found")
    return _to_info(attachment)
