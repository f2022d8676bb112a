"""Hugging Face inference API adapter.

Calls the hosted text-generation endpoint ``POST {base_url}/models/{model}``
with ``httpx``. The endpoint answers either ``{"generated_text": ...}`` or a
list of such objects.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_ai_call
from glimmer.errors import AIProviderError

from ..base import JSON_ONLY_INSTRUCTION, TextGenerator

logger = get_logger(__name__)


def parse_generated_text(payload: Any) -> Optional[str]:
    """Pull ``generated_text`` out of an inference API response body."""
    if isinstance(payload, dict) and isinstance(payload.get("generated_text"), str):
        return payload["generated_text"]
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        text = payload[0].get("generated_text")
        if isinstance(text, str):
            return text
    return None


class HuggingFaceGenerator(TextGenerator):
    """Text generator using the Hugging Face text-generation inference API."""

    provider = "huggingface"

    def __init__(
        self,
        model: str,
        *,
        token: Optional[str],
        base_url: str = "https://api-inference.huggingface.co",
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(model)
        self._token = token
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
        inputs = prompt
        if system_prompt:
            inputs = f"{system_prompt}\n\n{inputs}"
        if json_mode:
            inputs = f"{inputs}\n{JSON_ONLY_INSTRUCTION}"

        parameters: dict[str, Any] = {"max_new_tokens": max_tokens, "return_full_text": False}
        if temperature > 0:
            parameters.update(do_sample=True, temperature=temperature, top_k=50)
        else:
            parameters["do_sample"] = False

        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        url = f"{self._base_url}/models/{self.model}"

        start_time = time.time()
        try:
            response = await self._client.post(url, json={"inputs": inputs, "parameters": parameters}, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log_ai_call(self.provider, self.model, (time.time() - start_time) * 1000, success=False)
            raise AIProviderError(self.provider, str(e)) from e

        text = parse_generated_text(payload)
        log_ai_call(self.provider, self.model, (time.time() - start_time) * 1000, success=bool(text))
        if text is None:
            if isinstance(payload, dict) and payload.get("error"):
                raise AIProviderError(self.provider, str(payload["error"]))
            raise AIProviderError(self.provider, "response carried no generated_text")
        text = text.strip()
        if not text:
            raise AIProviderError(self.provider, "empty response")
        return text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
