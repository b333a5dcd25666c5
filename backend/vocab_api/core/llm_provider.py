from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from ..config import Settings
from .errors import ProviderError


class LLMProvider(ABC):
    """Text in, text out. Knows nothing about words."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        ...


class DummyLLMProvider(LLMProvider):
    """Used when no API key is configured; enriches nothing."""

    async def complete(self, prompt: str) -> str:
        return "[]"


class GeminiProvider(LLMProvider):
    """Calls the Gemini generateContent REST endpoint. Failures are raised, never retried."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_sec: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout_sec,
            transport=self._transport,
        ) as client:
            return await client.post(
                self.endpoint,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
            )

    async def complete(self, prompt: str) -> str:
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            resp = await asyncio.wait_for(self._post(payload), timeout=self.timeout_sec)
        except asyncio.TimeoutError:
            raise ProviderError(f"Gemini call timed out after {self.timeout_sec}s")
        except httpx.HTTPError as exc:
            raise ProviderError(f"Gemini request error ({type(exc).__name__}): {exc}")

        if resp.status_code >= 400:
            raise ProviderError(
                f"Gemini returned HTTP {resp.status_code}",
                http_status=resp.status_code,
                body=resp.text[:500],
            )

        try:
            data = resp.json()
            parts = data["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise ProviderError("Gemini response has no candidate text", body=resp.text[:500])

        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        if not text:
            raise ProviderError("Gemini response has no candidate text", body=resp.text[:500])

        print(f"[ai] got {len(text)} chars from {self.model}")
        return text


def build_provider(settings: Settings) -> LLMProvider:
    if not settings.gemini_api_key:
        print("[ai] GEMINI_API_KEY not set, using dummy provider")
        return DummyLLMProvider()
    return GeminiProvider(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout_sec=settings.ai_timeout_sec,
    )
