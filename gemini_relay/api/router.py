# gemini_relay/api/router.py
from fastapi import APIRouter

from gemini_relay.api.endpoints import (
    chat,
    conversations,
    files
)

api_router = APIRouter()

# Include all routers
api_router.include_router(chat.router, prefix="/gemini3", tags=["Chat"])
api_router.include_router(conversations.router, prefix="/conversations", tags=["Conversations"])
api_router.include_router(files.router, tags=["Files"])
