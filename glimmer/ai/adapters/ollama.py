"""Local model server (Ollama) adapter.

Posts to ``{base_url}/api/generate``. Depending on server version and the
``stream`` flag, the body is a single JSON object, a JSON list, or NDJSON
chunks; all three are handled.
"""

from __future__ import annotations

import json
import time
from typing import Any, Optional

import httpx

from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_ai_call
from glimmer.errors import AIProviderError

from ..base import TextGenerator

logger = get_logger(__name__)

RAW_TEXT_LIMIT = 1000


def _text_of(chunk: Any) -> Optional[str]:
    if isinstance(chunk, str):
        return chunk
    if isinstance(chunk, list) and chunk:
        return _text_of(chunk[0])
    if isinstance(chunk, dict):
        value = chunk.get("response") or chunk.get("generated_text")
        if value:
            return str(value)
    return None


def parse_ollama_body(raw: str) -> str:
    """Extract generated text from an ``/api/generate`` response body.

    Tries the whole body as one JSON document first, then NDJSON lines from
    the last one backwards, and finally falls back to the raw text truncated
    to 1000 characters.
    """
    try:
        text = _text_of(json.loads(raw))
        if text is not None:
            return text.strip()
    except ValueError:
        pass

    lines = [line.strip() for line in raw.splitlines() if line.strip()]
    for line in reversed(lines):
        try:
            chunk = json.loads(line)
        except ValueError:
            continue
        if isinstance(chunk, dict):
            text = _text_of(chunk)
            if text is not None:
                return text.strip()

    return raw[:RAW_TEXT_LIMIT]


class OllamaGenerator(TextGenerator):
    """Text generator using a local Ollama server."""

    provider = "local"

    def __init__(
        self,
        model: str = "phi3:mini",
        *,
        base_url: str = "http://localhost:11434",
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(model)
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> str:
        body: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"num_predict": max_tokens, "temperature": temperature},
        }
        if system_prompt:
            body["system"] = system_prompt
        if json_mode:
            body["format"] = "json"

        start_time = time.time()
        try:
            response = await self._client.post(f"{self._base_url}/api/generate", json=body)
            response.raise_for_status()
        except httpx.HTTPError as e:
            log_ai_call(self.provider, self.model, (time.time() - start_time) * 1000, success=False)
            raise AIProviderError(self.provider, str(e)) from e

        text = parse_ollama_body(response.text)
        log_ai_call(self.provider, self.model, (time.time() - start_time) * 1000, success=bool(text))
        if not text.strip():
            raise AIProviderError(self.provider, "empty response")
        return text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
