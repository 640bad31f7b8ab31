"""Port interface for a text-generation backend."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    #: Human-readable model label reported back to callers (e.g. "Gemini Flash 2.0").
    label: str = "llm"

    @abstractmethod
    async def generate(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        """Send *prompt* and return the raw text of the reply.

        Implementations raise on transport/SDK errors or when the reply has
        no text; the dispatcher turns any exception into a fallback.
        """
        ...
