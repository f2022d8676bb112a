"""Unit tests for the pydantic-ai backed generator."""

import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models import test as test_models

from glimmer.ai.adapters import PydanticAIGenerator
from glimmer.errors import AIProviderError


async def test_returns_model_output():
    generator = PydanticAIGenerator(
        test_models.TestModel(custom_output_text="  ✨ Hello, stargazer  "), provider="openai", model_name="test"
    )
    assert await generator.generate("Hi", system_prompt="Be cosmic") == "✨ Hello, stargazer"


async def test_model_failure_raises_provider_error():
    def explode(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        raise RuntimeError("quota exceeded")

    generator = PydanticAIGenerator(FunctionModel(explode), provider="gemini", model_name="test")
    with pytest.raises(AIProviderError) as exc_info:
        await generator.generate("Hi")
    assert exc_info.value.provider == "gemini"
    assert "quota exceeded" in str(exc_info.value)


async def test_empty_output_raises_provider_error():
    generator = PydanticAIGenerator(test_models.TestModel(custom_output_text="   "), provider="openai", model_name="test")
    with pytest.raises(AIProviderError):
        await generator.generate("Hi", json_mode=True)
