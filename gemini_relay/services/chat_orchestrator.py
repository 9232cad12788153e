"""
Chat orchestration: one user turn against the completion gateway
"""
import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.core.config import settings
from gemini_relay.core.exceptions import ValidationError
from gemini_relay.crud import crud_conversation, crud_message
from gemini_relay.db.models import ROLE_USER, ROLE_EXTERNAL_AI
from gemini_relay.observability.context import session_id_ctx
from gemini_relay.schemas.chat import ChatReply
from gemini_relay.services.llm.base import BaseCompletionGateway

logger = logging.getLogger(__name__)


def make_title(text: str) -> str:
    return text[:settings.TITLE_MAX_CHARS]


async def send_turn(
        db: AsyncSession,
        gateway: BaseCompletionGateway,
        *,
        session_id: Optional[str],
        text: Optional[str],
        attachment_ids: Optional[List[Any]] = None
) -> ChatReply:
    """
    Persist the user message, ask the gateway, persist the reply, upsert the conversation.

    The steps are committed one by one. If the gateway fails the user message
    stays stored, no reply is written and the conversation is left untouched;
    the ExternalServiceError propagates to the caller.
    """
    if not session_id or not text:
        raise ValidationError("sessionId and message are required")

    session_id_ctx.set(session_id)
    references = [ref for ref in (attachment_ids or []) if ref]

    user_message = await crud_message.create_message(
        db,
        session_id=session_id,
        role=ROLE_USER,
        content=text,
        attachment_ids=references
    )
    logger.info(f"📨 User message {user_message.id} stored ({len(references)} attachments)")

    reply_text = await gateway.complete(text)

    reply = await crud_message.create_message(
        db,
        session_id=session_id,
        role=ROLE_EXTERNAL_AI,
        content=reply_text,
        sender_ai=gateway.model_name
    )

    # Title is overwritten on every turn, last write wins
    await crud_conversation.upsert_turn(db, session_id=session_id, title=make_title(text))
    logger.info(f"✅ Turn completed: reply {reply.id} from {gateway.model_name}")

    return ChatReply(
        session_id=session_id,
        message_id=reply.id,
        role=reply.role,
        content=reply.content,
        created_at=reply.created_at
    )
