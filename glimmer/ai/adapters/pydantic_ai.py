"""Pydantic AI adapter for hosted chat models (OpenAI, Gemini).

Wraps a pydantic-ai ``Model`` behind the :class:`TextGenerator` interface. A
short-lived ``Agent`` is built per call because the system prompt differs
between assistant operations.
"""

from __future__ import annotations

import time
from typing import Optional

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_ai_call
from glimmer.errors import AIProviderError

from ..base import JSON_ONLY_INSTRUCTION, TextGenerator

logger = get_logger(__name__)


class PydanticAIGenerator(TextGenerator):
    """Text generator backed by a pydantic-ai model.

    Attributes:
        provider: Provider name (``openai`` or ``gemini``)
        model: Model identifier
    """

    def __init__(self, model: Model, *, provider: str, model_name: str, timeout: float = 20.0) -> None:
        super().__init__(model_name)
        self.provider = provider
        self._model = model
        self._timeout = timeout

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> str:
        instructions = system_prompt or ""
        if json_mode:
            instructions = f"{instructions}\n{JSON_ONLY_INSTRUCTION}".strip()

        agent = Agent(
            self._model,
            system_prompt=instructions or (),
            model_settings=ModelSettings(max_tokens=max_tokens, temperature=temperature, timeout=self._timeout),
        )

        start_time = time.time()
        try:
            result = await agent.run(prompt)
        except Exception as e:
            log_ai_call(self.provider, self.model, (time.time() - start_time) * 1000, success=False)
            raise AIProviderError(self.provider, str(e)) from e

        duration_ms = (time.time() - start_time) * 1000
        text = str(result.output or "").strip()
        log_ai_call(self.provider, self.model, duration_ms, success=bool(text))
        logger.debug(f"{self.provider} generation finished in {duration_ms:.0f}ms ({len(text)} chars)")
        if not text:
            raise AIProviderError(self.provider, "empty response")
        return text
