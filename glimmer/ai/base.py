"""Text generation abstraction.

Every provider adapter implements :class:`TextGenerator`. Adapters raise
:class:`~glimmer.errors.AIProviderError` on failure; turning failures into
friendly fallback text is the assistant's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

JSON_ONLY_INSTRUCTION = "Respond with a single JSON object and nothing else."


class TextGenerator(ABC):
    """A language model that turns a prompt into text.

    Attributes:
        provider: Short provider name used in logs and metrics.
        model: Model identifier sent to the provider.
    """

    provider: str = "unknown"

    def __init__(self, model: str) -> None:
        self.model = model

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> str:
        """Generate a completion for ``prompt``.

        Args:
            prompt: User prompt.
            system_prompt: Instructions framing the reply.
            max_tokens: Upper bound on generated tokens.
            temperature: Sampling temperature.
            json_mode: Ask the model to answer with a JSON object.

        Returns:
            The generated text, stripped.

        Raises:
            AIProviderError: The provider failed or returned no text.
        """

    async def aclose(self) -> None:
        """Release network resources held by the generator."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider}, model={self.model})"
