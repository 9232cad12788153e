"""
Gemini completion gateway
Calls the generateContent endpoint once per prompt
"""
import logging
from typing import Any, Dict, Optional

import httpx

from gemini_relay.core.config import settings
from gemini_relay.core.exceptions import ExternalServiceError
from gemini_relay.services.llm.base import BaseCompletionGateway

logger = logging.getLogger(__name__)


class GeminiGateway(BaseCompletionGateway):
    """Gateway for Google Gemini generateContent"""

    def __init__(
            self,
            api_key: Optional[str] = None,
            model_name: Optional[str] = None,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            empty_reply: Optional[str] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model_name = model_name or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.empty_reply = settings.EMPTY_REPLY_PLACEHOLDER if empty_reply is None else empty_reply
        self.timeout = httpx.Timeout(timeout or settings.GEMINI_TIMEOUT_SECONDS, connect=10.0)
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

        logger.info(f"🚀 GeminiGateway initialized: model={self.model_name}")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model_name}:generateContent"

    @staticmethod
    def _build_payload(prompt: str) -> Dict[str, Any]:
        return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

    def _extract_text(self, data: Any) -> str:
        text = data["candidates"][0]["content"]["parts"][0].get("text")
        if text is not None and not isinstance(text, str):
            raise TypeError(f"Unexpected text type: {type(text).__name__}")
        return text or self.empty_reply

    async def complete(self, prompt: str) -> str:
        """Generate a full reply for a single prompt, no history"""
        if not self.api_key:
            raise ExternalServiceError() from ValueError("Gemini API key is not configured")

        try:
            logger.info(f"📡 Sending request to Gemini: model={self.model_name}")
            response = await self._client.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self._build_payload(prompt)
            )
            response.raise_for_status()
            return self._extract_text(response.json())
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"❌ Gemini generation error: {type(e).__name__}: {e}")
            raise ExternalServiceError() from e

    async def aclose(self) -> None:
        await self._client.aclose()
