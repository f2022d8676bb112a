"""AI text generation: provider adapters and the cosmic assistant."""

from .assistant import CosmicAssistant, get_assistant
from .base import TextGenerator

__all__ = ["CosmicAssistant", "TextGenerator", "get_assistant"]
