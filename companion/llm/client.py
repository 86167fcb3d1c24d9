from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    text: str
    confidence: float | None = None


class ModelClient(Protocol):
    async def generate(self, prompt: str) -> GenerationResult: ...


def _strip_reasoning(content: str) -> str:
    # Strip deepseek/qwen reasoning blocks: <think>...</think>
    content = re.sub(r"<think>.*?</think>\n*", "", content, flags=re.DOTALL)
    # Edge-cases if the LLM gets truncated exactly after opening or closing tags
    content = content.split("</think>")[-1]
    return content.split("<think>")[0].strip()


class OllamaClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        model: str,
    ):
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._model = model

    async def generate(self, prompt: str) -> GenerationResult:
        """Single-shot completion via POST /api/generate. Raises on HTTP errors."""
        url = f"{self._base_url}/api/generate"
        payload = {"model": self._model, "prompt": prompt, "stream": False}

        resp = await self._http.post(url, json=payload)
        if resp.status_code == 404:
            logger.error(
                "Ollama model '%s' not found, download it with: ollama pull %s",
                self._model,
                self._model,
            )
        resp.raise_for_status()
        data = resp.json()
        content = data.get("response", "")

        if content:
            logger.debug("LLM raw response: %s", content[:500])
            content = _strip_reasoning(content)

        logger.debug("LLM processed response: %s", content[:500])
        return GenerationResult(text=content)

    async def is_available(self) -> bool:
        try:
            resp = await self._http.get(
                f"{self._base_url}/api/tags",
                timeout=5.0,
            )
            return resp.status_code == 200
        except httpx.HTTPError:
            return False
