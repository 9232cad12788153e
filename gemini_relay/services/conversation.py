"""
Read paths over conversation history: paged listing and full threads
"""
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.core.config import settings
from gemini_relay.crud import crud_attachment, crud_conversation, crud_message
from gemini_relay.crud.attachment import coerce_attachment_id
from gemini_relay.schemas.conversation import (
    AttachmentRef,
    ConversationPage,
    ConversationSummary,
    Pagination,
    ThreadMessage,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# OFFSET plus LIMIT must fit a signed 64-bit integer
MAX_OFFSET = 2 ** 62


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def normalize_paging(page: Any = None, limit: Any = None):
    """page falls back to 1, limit to 20 and is capped at 100; page is capped so the offset fits"""
    limit = min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)
    page = min(_positive_int(page, DEFAULT_PAGE), MAX_OFFSET // limit + 1)
    return page, limit


async def list_conversations(
        db: AsyncSession,
        *,
        page: Any = None,
        limit: Any = None,
        keyword: Optional[str] = None
) -> ConversationPage:
    page, limit = normalize_paging(page, limit)
    conversations, total = await crud_conversation.search(
        db,
        keyword=keyword or "",
        skip=(page - 1) * limit,
        limit=limit
    )
    counts = await crud_message.count_by_sessions(
        db, session_ids=[conv.session_id for conv in conversations]
    )

    return ConversationPage(
        list=[
            ConversationSummary(
                session_id=conv.session_id,
                title=conv.title,
                updated_at=conv.updated_at,
                message_count=counts.get(conv.session_id, 0)
            )
            for conv in conversations
        ],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            has_more=page * limit < total
        )
    )


async def get_thread(db: AsyncSession, *, session_id: str) -> List[ThreadMessage]:
    """Every message of the session, oldest first; unknown sessions give an empty list"""
    messages = await crud_message.get_session_messages(db, session_id=session_id)
    attachments = await crud_attachment.get_many(
        db, ids=[ref for msg in messages for ref in (msg.attachment_ids or [])]
    )

    thread = []
    for msg in messages:
        resolved = []
        for ref in msg.attachment_ids or []:
            attachment = attachments.get(coerce_attachment_id(ref))
            if attachment is None:
                continue
            resolved.append(AttachmentRef(
                file_id=attachment.id,
                file_name=attachment.file_name,
                url=settings.public_url(attachment.file_path)
            ))
        thread.append(ThreadMessage(
            message_id=msg.id,
            role=msg.role,
            content=msg.content,
            attachments=resolved,
            created_at=msg.created_at
        ))
    return thread
