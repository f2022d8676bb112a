"""Unit tests for choosing the text generator from settings."""

from glimmer.ai.adapters import HuggingFaceGenerator, OllamaGenerator, PydanticAIGenerator
from glimmer.ai.factory import build_text_generator
from glimmer.server.core.config import Settings


def make_settings(**env) -> Settings:
    return Settings(_env_file=None, **env)


def test_offline_has_no_generator():
    assert build_text_generator(make_settings(AI_PROVIDER="offline")) is None


def test_unknown_provider_has_no_generator():
    assert build_text_generator(make_settings(AI_PROVIDER="carrier-pigeon")) is None


def test_missing_credentials_have_no_generator():
    assert build_text_generator(make_settings(AI_PROVIDER="openai", OPENAI_API_KEY=None)) is None
    assert build_text_generator(make_settings(AI_PROVIDER="gemini", GEMINI_API_KEY=None)) is None
    assert build_text_generator(make_settings(AI_PROVIDER="huggingface", HF_TOKEN=None)) is None


def test_openai_generator():
    generator = build_text_generator(make_settings(AI_PROVIDER="openai", OPENAI_API_KEY="sk-test"))
    assert isinstance(generator, PydanticAIGenerator)
    assert generator.provider == "openai"
    assert generator.model == "gpt-4o-mini"


def test_gemini_generator():
    generator = build_text_generator(make_settings(AI_PROVIDER="gemini", GEMINI_API_KEY="g-test"))
    assert isinstance(generator, PydanticAIGenerator)
    assert generator.provider == "gemini"


def test_huggingface_and_local_generators():
    hf = build_text_generator(make_settings(AI_PROVIDER="HuggingFace", HF_TOKEN="hf_x", HF_MODEL="distilgpt2"))
    assert isinstance(hf, HuggingFaceGenerator)
    assert hf.model == "distilgpt2"
    local = build_text_generator(make_settings(AI_PROVIDER="local"))
    assert isinstance(local, OllamaGenerator)
