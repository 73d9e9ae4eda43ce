# src/ado_review/providers/base.py
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def review(self, prompt: str) -> str | None:
        """Send prompt to LLM and return the critique, or None when there is nothing to say."""
        pass

    async def close(self) -> None:
        """Release network resources held by the provider."""
        pass
