"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables, falls back
to defaults, and builds the grouped configuration views.
"""

from pathlib import Path

import pytest

from glimmer.server.core.config import AIConfig, CORSConfig, OllamaConfig, Settings


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> dict[str, str]:
    """Parse .env.example file and return environment variables."""
    env_vars = {}
    with open(env_example_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_port_binding(self, env_example_vars: dict[str, str], monkeypatch):
        monkeypatch.setenv("GLIMMER_SERVER_PORT", env_example_vars["GLIMMER_SERVER_PORT"])
        settings = Settings(_env_file=None)
        assert settings.server_port == int(env_example_vars["GLIMMER_SERVER_PORT"])

    def test_database_url_binding(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./glimmer.db")
        assert Settings(_env_file=None).database_url == "sqlite+aiosqlite:///./glimmer.db"

    def test_social_settings_binding(self, monkeypatch):
        monkeypatch.setenv("FRIEND_STREAK_WINDOW_HOURS", "24")
        monkeypatch.setenv("ACTIVITY_FEED_LIMIT", "5")
        settings = Settings(_env_file=None)
        assert settings.friend_streak_window_hours == 24
        assert settings.activity_feed_limit == 5

    def test_streak_window_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("FRIEND_STREAK_WINDOW_HOURS", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_every_example_key_is_known(self, env_example_vars: dict[str, str]):
        """Keys in .env.example are either Settings aliases or Logfire variables."""
        aliases = {field.alias for field in Settings.model_fields.values()}
        read_elsewhere = {"LOGFIRE_ENABLED", "LOGFIRE_TOKEN", "LOGFIRE_PROJECT_NAME", "LOGFIRE_ENVIRONMENT"}
        assert set(env_example_vars) - aliases <= read_elsewhere


class TestGroupedConfig:
    """Test the grouped configuration properties."""

    def test_ai_defaults_to_offline(self, monkeypatch):
        monkeypatch.delenv("AI_PROVIDER", raising=False)
        ai = Settings(_env_file=None).ai
        assert isinstance(ai, AIConfig)
        assert ai.provider == "offline"

    def test_ollama_group(self):
        settings = Settings(_env_file=None, OLLAMA_BASE_URL="http://ollama:11434", OLLAMA_MODEL="llama3")
        ollama = settings.ollama
        assert isinstance(ollama, OllamaConfig)
        assert (ollama.base_url, ollama.model) == ("http://ollama:11434", "llama3")

    def test_openai_group(self):
        openai = Settings(_env_file=None, OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4o").openai
        assert openai.api_key == "sk-test"
        assert openai.model == "gpt-4o"

    def test_cors_from_environment(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://glimmer.app"]')
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")
        cors = Settings(_env_file=None).cors
        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["https://glimmer.app"]
        assert cors.allow_credentials is False
        assert cors.allow_methods == ["*"]
