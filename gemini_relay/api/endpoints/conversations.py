# gemini_relay/api/endpoints/conversations.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.db.session import get_db
from gemini_relay.schemas import ok
from gemini_relay.services import conversation as conversation_service

import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_conversations(
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        keyword: Optional[str] = Query(None),
        db: AsyncSession = Depends(get_db)
):
    """List conversations, newest first, optionally filtered by title keyword"""
    result = await conversation_service.list_conversations(
        db,
        page=page,
        limit=limit,
        keyword=keyword
    )
    logger.info(f"📋 Found {len(result.list)} of {result.pagination.total} conversations")
    return ok(result.model_dump(by_alias=True, mode="json"))


@router.get("/{session_id}/messages")
async def get_conversation_messages(
        session_id: str,
        db: AsyncSession = Depends(get_db)
):
    """Get all messages in a conversation"""
    thread = await conversation_service.get_thread(db, session_id=session_id)
    return ok([msg.model_dump(by_alias=True, mode="json") for msg in thread])
