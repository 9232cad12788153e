# gemini_relay/crud/attachment.py
"""CRUD operations for uploaded attachments"""
from typing import Any, Dict, Iterable, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.crud.base import CRUDBase
from gemini_relay.db.models.attachment import Attachment


# Range of the Integer primary key column
MAX_ATTACHMENT_ID = 2 ** 31 - 1


def coerce_attachment_id(value: Any) -> Optional[int]:
    """Turn a client-supplied reference into a primary key, or None if it cannot be one"""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    if isinstance(value, int) and 1 <= value <= MAX_ATTACHMENT_ID:
        return value
    return None


class CRUDAttachment(CRUDBase[Attachment]):
    """CRUD operations for Attachment; records are never updated after upload"""

    async def create_attachment(
            self,
            db: AsyncSession,
            *,
            file_name: str,
            file_type: str,
            file_size: int,
            file_path: str,
            session_id: Optional[str] = None
    ) -> Attachment:
        """Create a new attachment record"""
        return await self.create(
            db,
            session_id=session_id,
            file_name=file_name,
            file_type=file_type,
            file_size=file_size,
            file_path=file_path
        )

    async def get_many(
            self,
            db: AsyncSession,
            *,
            ids: Iterable[Any]
    ) -> Dict[int, Attachment]:
        """Look up attachments by reference; unresolvable references are skipped"""
        keys = {key for key in (coerce_attachment_id(value) for value in ids) if key is not None}
        if not keys:
            return {}

        result = await db.execute(select(Attachment).where(Attachment.id.in_(keys)))
        return {attachment.id: attachment for attachment in result.scalars().all()}


# Create instance
crud_attachment = CRUDAttachment(Attachment)
