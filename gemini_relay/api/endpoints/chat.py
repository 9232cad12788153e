# gemini_relay/api/endpoints/chat.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gemini_relay.api.dependencies import get_completion_gateway
from gemini_relay.db.session import get_db
from gemini_relay.schemas import ChatRequest, ok
from gemini_relay.services import chat_orchestrator
from gemini_relay.services.llm.base import BaseCompletionGateway

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/chat")
async def chat(
        chat_data: ChatRequest,
        db: AsyncSession = Depends(get_db),
        gateway: BaseCompletionGateway = Depends(get_completion_gateway)
):
    """
    Send one message to Gemini and store both sides of the exchange
    """
    logger.info(f"📨 Chat request for session {chat_data.session_id}")

    reply = await chat_orchestrator.send_turn(
        db,
        gateway,
        session_id=chat_data.session_id,
        text=chat_data.message,
        attachment_ids=chat_data.attachments
    )
    return ok(reply.model_dump(by_alias=True, mode="json"))
