"""Build the configured text generator.

``AI_PROVIDER`` selects one provider; there is no fallback chain across
vendors. A provider that is selected but missing its credentials yields no
generator, and the assistant then answers with canned text.
"""

from __future__ import annotations

from typing import Optional

from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.openai import OpenAIProvider

from glimmer.core.logging_config import get_logger
from glimmer.server.core.config import Settings

from .adapters import HuggingFaceGenerator, OllamaGenerator, PydanticAIGenerator
from .base import TextGenerator

logger = get_logger(__name__)

SUPPORTED_PROVIDERS = ("openai", "gemini", "huggingface", "local", "offline")


def build_text_generator(settings: Settings) -> Optional[TextGenerator]:
    """Create the generator for ``settings.ai_provider``.

    Returns:
        The generator, or None for ``offline`` and for providers lacking credentials.
    """
    provider = settings.ai.provider.strip().lower()
    timeout = settings.ai.timeout_seconds

    if provider == "openai":
        openai_config = settings.openai
        if not openai_config.api_key:
            logger.warning("AI_PROVIDER=openai but OPENAI_API_KEY is not set; using offline replies")
            return None
        model = OpenAIChatModel(
            openai_config.model,
            provider=OpenAIProvider(api_key=openai_config.api_key, base_url=openai_config.base_url),
        )
        return PydanticAIGenerator(model, provider="openai", model_name=openai_config.model, timeout=timeout)

    if provider == "gemini":
        gemini_config = settings.gemini
        if not gemini_config.api_key:
            logger.warning("AI_PROVIDER=gemini but GEMINI_API_KEY is not set; using offline replies")
            return None
        model = GoogleModel(gemini_config.model, provider=GoogleProvider(api_key=gemini_config.api_key))
        return PydanticAIGenerator(model, provider="gemini", model_name=gemini_config.model, timeout=timeout)

    if provider == "huggingface":
        hf_config = settings.huggingface
        if not hf_config.token:
            logger.warning("AI_PROVIDER=huggingface but HF_TOKEN is not set; using offline replies")
            return None
        return HuggingFaceGenerator(hf_config.model, token=hf_config.token, base_url=hf_config.base_url, timeout=timeout)

    if provider == "local":
        ollama_config = settings.ollama
        return OllamaGenerator(ollama_config.model, base_url=ollama_config.base_url, timeout=timeout)

    if provider != "offline":
        logger.warning(f"Unknown AI_PROVIDER '{provider}' (supported: {', '.join(SUPPORTED_PROVIDERS)}); using offline replies")
    return None
