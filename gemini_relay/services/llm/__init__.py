"""
Completion gateways
"""
from gemini_relay.services.llm.base import BaseCompletionGateway
from gemini_relay.services.llm.gemini import GeminiGateway

__all__ = [
    "BaseCompletionGateway",
    "GeminiGateway",
]
