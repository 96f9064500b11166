from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from utility.settings import Settings


@dataclass(frozen=True)
class CompletionText:
    text: str


@dataclass(frozen=True)
class CompletionEmpty:
    """The service answered but there was no usable candidate."""


@dataclass(frozen=True)
class TransportFailure:
    reason: str


CompletionResult = Union[CompletionText, CompletionEmpty, TransportFailure]


def extract_first_text(body: Any) -> Optional[str]:
    """
    Pull candidates[0].content.parts[0].text out of a generateContent body.
    Returns None when any step of that path is missing or the text is blank.
    """
    if not isinstance(body, dict):
        return None
    candidates = body.get("candidates") or []
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return None
    parts = content.get("parts") or []
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class AsyncGeminiClient:
    """
    Async client for the Gemini generateContent endpoint.
    One prompt in, one CompletionResult out. Sends a single user turn per call
    and never streams.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash",
        endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models",
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or ""
        self.model = model
        self.endpoint = f"{endpoint.rstrip('/')}/{model}:generateContent"
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Content-Type": "application/json",
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "AsyncGeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            endpoint=settings.gemini_endpoint,
            timeout=settings.gemini_timeout_seconds,
        )

    @staticmethod
    def build_payload(prompt: str) -> dict:
        return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

    async def complete(self, prompt: str) -> CompletionResult:
        """
        Transport problems (connect errors, timeouts, non-2xx) come back as
        TransportFailure. A 2xx body that is not JSON raises ValueError.
        """
        payload = self.build_payload(prompt)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    headers=self.headers,
                    json=payload,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            print(f"⚠️ Gemini returned HTTP {e.response.status_code}")
            return TransportFailure(reason=f"HTTP {e.response.status_code}")
        except httpx.TransportError as e:
            print(f"⚠️ Gemini request failed: {type(e).__name__}: {e}")
            return TransportFailure(reason=type(e).__name__)

        text = extract_first_text(response.json())
        if text is None:
            print("⚠️ Gemini response had no usable candidate")
            return CompletionEmpty()
        return CompletionText(text=text)
