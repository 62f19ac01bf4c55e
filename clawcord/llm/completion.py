"""
clawcord/llm/completion.py

Single-shot client for an OpenAI-compatible chat-completion endpoint.

`complete()` never raises: every failure is folded into one of the
CompletionResult variants from clawcord.llm.errors so the dispatcher can
always relay something to the channel.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from clawcord.config.loader import Settings
from .errors import (
    CompletionResult,
    HttpError,
    MalformedResponse,
    Success,
    Unknown,
    Unreachable,
    describe_error,
)

logger = logging.getLogger(__name__)

# Sent, but nothing came back.
_NO_RESPONSE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)


def build_payload(model: str, user_text: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "user", "content": user_text},
        ],
    }


def extract_content(data: Any) -> str | None:
    """Return choices[0].message.content, or None if the body has another shape."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(content, str) and content:
        return content
    return None


class CompletionClient:
    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        """
        settings:    url, model, api key and timeout for every request
        http_client: shared client; its lifetime is owned by the caller
        """
        self._settings = settings
        self._http = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._settings.openclaw_api_key}",
        }

    async def complete(self, user_text: str) -> CompletionResult:
        """Send one prompt and return the classified outcome."""
        try:
            response = await self._http.post(
                self._settings.openclaw_api_url,
                json=build_payload(self._settings.openclaw_model, user_text),
                headers=self._headers(),
                timeout=self._settings.request_timeout,
                follow_redirects=True,
            )
        except _NO_RESPONSE_ERRORS as e:
            logger.error("OpenClaw API Error: %s", describe_error(e))
            logger.error("No response received from OpenClaw API")
            return Unreachable()
        except Exception as e:  # noqa: BLE001
            logger.error("OpenClaw API Error: %s", describe_error(e))
            return Unknown()

        if not response.is_success:
            logger.error(
                "OpenClaw API Error: status %s %s, body: %s",
                response.status_code,
                response.reason_phrase,
                response.text[:500],
            )
            return HttpError(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError:
            data = None

        content = extract_content(data)
        if content is None:
            logger.error("Unexpected API response structure: %s", response.text[:500])
            return MalformedResponse()
        return Success(content)
