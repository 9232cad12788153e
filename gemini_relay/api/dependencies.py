# gemini_relay/api/dependencies.py
from fastapi import Request

from gemini_relay.services.llm.base import BaseCompletionGateway


async def get_completion_gateway(request: Request) -> BaseCompletionGateway:
    """
    Gateway opened in the application lifespan
    """
    return request.app.state.gateway
