"""
Cosmic assistant.

High-level AI operations used by the API: chatbot replies, memory insights
and pet reactions. Provider failures never escape; each operation logs the
error and answers with fallback text instead.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_error
from glimmer.errors import AIProviderError
from glimmer.server.core.config import settings

from . import prompts
from .base import TextGenerator
from .factory import build_text_generator
from .parsing import extract_json_object, first_text

logger = get_logger(__name__)

CHATBOT_FALLBACK = "✨ My cosmic connection glitched... try again!"
CHATBOT_OFFLINE = "✨ The stars are quiet right now, but I'm listening. Tell me about a memory that made you smile!"
PET_FALLBACK = "✨ Your cosmic companion sparkles with joy! ✨"

EMPTY_INSIGHT = {
    "insight": "No memories yet. Your universe is waiting for its first star.",
    "suggestion": "Add a small memory from today to begin your constellation.",
}
FALLBACK_INSIGHT = {
    "insight": "Your memories glitter softly across time.",
    "suggestion": "Share a new moment to brighten your constellation.",
}
UNPARSED_SUGGESTION = "Share another special moment to brighten your constellation."
UNPARSED_INSIGHT_LIMIT = 300

INSIGHT_KEYS = ("insight", "summary", "insights")
SUGGESTION_KEYS = ("suggestion", "recommendation")


class CosmicAssistant:
    """AI features of Glimmer on top of an optional text generator.

    With no generator configured every operation answers with canned text.
    """

    def __init__(self, generator: Optional[TextGenerator] = None) -> None:
        self.generator = generator

    @property
    def is_online(self) -> bool:
        return self.generator is not None

    async def chatbot_reply(self, message: str, context: Optional[str] = None) -> str:
        """Short, friendly, cosmic reply to a user message."""
        if self.generator is None:
            return CHATBOT_OFFLINE
        try:
            return await self.generator.generate(
                message,
                system_prompt=prompts.chatbot_system_prompt(context),
                max_tokens=200,
                temperature=0.7,
            )
        except AIProviderError as e:
            self._report("chatbot_reply", e)
            return CHATBOT_FALLBACK

    async def memory_insight(self, memories: List[Dict[str, Any]]) -> Dict[str, str]:
        """Reflect on the user's recent memories.

        Args:
            memories: Memories as plain dicts, newest first; only the first
                six are sent to the model.

        Returns:
            ``{"insight": ..., "suggestion": ...}``
        """
        if not memories:
            return dict(EMPTY_INSIGHT)
        if self.generator is None:
            return dict(FALLBACK_INSIGHT)

        try:
            text = await self.generator.generate(
                prompts.memory_insight_prompt(memories),
                system_prompt=prompts.MEMORY_INSIGHT_SYSTEM_PROMPT,
                max_tokens=150,
                temperature=0.0,
                json_mode=True,
            )
        except AIProviderError as e:
            self._report("memory_insight", e)
            return dict(FALLBACK_INSIGHT)

        return self.parse_insight(text)

    @staticmethod
    def parse_insight(text: str) -> Dict[str, str]:
        """Turn model output into an insight pair, tolerating prose and alternative keys."""
        parsed = extract_json_object(text)
        if parsed is not None:
            return {
                "insight": first_text(parsed, INSIGHT_KEYS) or FALLBACK_INSIGHT["insight"],
                "suggestion": first_text(parsed, SUGGESTION_KEYS) or FALLBACK_INSIGHT["suggestion"],
            }
        return {"insight": text[:UNPARSED_INSIGHT_LIMIT], "suggestion": UNPARSED_SUGGESTION}

    async def pet_reaction(self, pet: Any, action: str) -> str:
        """A cute line from the pet reacting to ``action``; under 40 words."""
        if self.generator is None:
            return PET_FALLBACK
        try:
            return await self.generator.generate(
                prompts.pet_reaction_prompt(pet.name, pet.species, pet.level, pet.mood, action),
                system_prompt=prompts.PET_SYSTEM_PROMPT,
                max_tokens=80,
                temperature=0.9,
            )
        except AIProviderError as e:
            self._report("pet_reaction", e)
            return PET_FALLBACK

    def _report(self, operation: str, error: AIProviderError) -> None:
        logger.warning(f"AI {operation} failed, using fallback text: {error}")
        log_error("AIProviderError", str(error), {"operation": operation, "provider": error.provider})

    async def aclose(self) -> None:
        if self.generator is not None:
            await self.generator.aclose()


_assistant: CosmicAssistant | None = None


def get_assistant() -> CosmicAssistant:
    """
    Returns the global singleton instance of CosmicAssistant.

    Creates it on first call from the application settings.
    """
    global _assistant
    if _assistant is None:
        _assistant = CosmicAssistant(build_text_generator(settings))
    return _assistant
