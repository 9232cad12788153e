# gemini_relay/crud/message.py
from typing import Any, Dict, Iterable, List, Optional
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.crud.base import CRUDBase
from gemini_relay.db.models.message import Message, MESSAGE_ROLES


class CRUDMessage(CRUDBase[Message]):
    async def create_message(
            self,
            db: AsyncSession,
            *,
            session_id: str,
            role: str,
            content: str,
            attachment_ids: Optional[List[Any]] = None,
            sender_ai: Optional[str] = None
    ) -> Message:
        """Append a message to a session"""
        if role not in MESSAGE_ROLES:
            raise ValueError(f"Unknown message role: {role}")

        return await self.create(
            db,
            session_id=session_id,
            role=role,
            content=content,
            attachment_ids=list(attachment_ids or []),
            sender_ai=sender_ai,
            created_at=datetime.utcnow()
        )

    async def get_session_messages(
            self,
            db: AsyncSession,
            *,
            session_id: str
    ) -> List[Message]:
        """All messages of a session in (created_at, storage order)"""
        query = (
            select(Message)
            .where(Message.session_id == session_id)
            .order_by(Message.created_at, Message.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def count_by_sessions(
            self,
            db: AsyncSession,
            *,
            session_ids: Iterable[str]
    ) -> Dict[str, int]:
        """Message count per session id, one grouped query"""
        session_ids = list(session_ids)
        if not session_ids:
            return {}

        query = (
            select(Message.session_id, func.count(Message.id))
            .where(Message.session_id.in_(session_ids))
            .group_by(Message.session_id)
        )
        result = await db.execute(query)
        counts = {sid: count for sid, count in result.all()}
        return {sid: counts.get(sid, 0) for sid in session_ids}


# Create instance
crud_message = CRUDMessage(Message)
