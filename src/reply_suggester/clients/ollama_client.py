"""Async HTTP client for the local Ollama server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from reply_suggester.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Status code and raw body text of one HTTP exchange."""

    status: int
    body_text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpClient(Protocol):
    async def post(self, url: str, json_body: dict) -> HttpResponse: ...


class OllamaClient:
    """Thin ``httpx.AsyncClient`` wrapper exposing ``post(url, json_body)``.

    The client never raises on HTTP status; callers inspect ``HttpResponse``.
    Connection-level failures are raised as ``TransportError``.
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        kwargs: dict = {"timeout": timeout}
        if transport is not None:
            kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**kwargs)

    async def post(self, url: str, json_body: dict) -> HttpResponse:
        try:
            response = await self.client.post(
                url,
                json=json_body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error("Ollama API request error: %s", e)
            raise TransportError(f"Could not connect to Ollama server at {url}: {e}") from e
        logger.debug("POST %s -> %d %s", url, response.status_code, response.reason_phrase)
        return HttpResponse(status=response.status_code, body_text=response.text)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> OllamaClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
