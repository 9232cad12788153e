# gemini_relay/crud/conversation.py
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.crud.base import CRUDBase
from gemini_relay.db.models.conversation import Conversation

_UPSERT_BUILDERS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CRUDConversation(CRUDBase[Conversation]):
    async def get_by_session_id(
            self,
            db: AsyncSession,
            *,
            session_id: str
    ) -> Optional[Conversation]:
        """Get conversation by its client-chosen session id"""
        result = await db.execute(
            select(Conversation).where(Conversation.session_id == session_id)
        )
        return result.scalar_one_or_none()

    async def upsert_turn(
            self,
            db: AsyncSession,
            *,
            session_id: str,
            title: str,
            now: Optional[datetime] = None
    ) -> None:
        """
        Create the conversation or refresh updated_at and overwrite title,
        in a single INSERT ... ON CONFLICT statement.
        """
        now = now or datetime.utcnow()
        dialect = db.get_bind().dialect.name
        builder = _UPSERT_BUILDERS.get(dialect)
        if builder is None:
            raise RuntimeError(f"Upsert is not supported for dialect: {dialect}")

        stmt = builder(Conversation).values(
            session_id=session_id,
            title=title,
            created_at=now,
            updated_at=now,
            is_deleted=False,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["session_id"],
            set_={"title": title, "updated_at": now},
        )
        await db.execute(stmt)
        await db.commit()

    async def search(
            self,
            db: AsyncSession,
            *,
            keyword: str = "",
            skip: int = 0,
            limit: int = 20
    ) -> Tuple[List[Conversation], int]:
        """Page of live conversations, newest first, plus the unpaged total"""
        conditions = [Conversation.is_deleted.is_(False)]
        if keyword:
            conditions.append(
                Conversation.title.ilike(f"%{_escape_like(keyword)}%", escape="\\")
            )

        total = await db.scalar(
            select(func.count()).select_from(Conversation).where(*conditions)
        )

        query = (
            select(Conversation)
            .where(*conditions)
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all()), total or 0


# Create instance
crud_conversation = CRUDConversation(Conversation)
