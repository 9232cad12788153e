"""
Base completion gateway interface
"""
from abc import ABC, abstractmethod


class BaseCompletionGateway(ABC):
    """Single blocking text-in/text-out call to an external model"""

    model_name: str

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """
        Send one request and return the reply text.
        Every failure is raised as ExternalServiceError.
        """
        pass

    async def aclose(self) -> None:
        """Release transport resources"""
        pass
