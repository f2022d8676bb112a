"""Provider adapters implementing :class:`glimmer.ai.base.TextGenerator`."""

from .huggingface import HuggingFaceGenerator
from .ollama import OllamaGenerator
from .pydantic_ai import PydanticAIGenerator

__all__ = ["HuggingFaceGenerator", "OllamaGenerator", "PydanticAIGenerator"]
