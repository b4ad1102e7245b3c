"""Turn a prompt into a SuggestionResult with one call to Ollama."""

from __future__ import annotations

import logging
import time
import uuid

from reply_suggester.clients.ollama_client import HttpClient
from reply_suggester.config import OllamaConfig
from reply_suggester.errors import ApiError
from reply_suggester.models.ollama import GenerateOptions, GenerateRequest
from reply_suggester.models.suggestion import SuggestionResult
from reply_suggester.pipeline.response_extractor import extract_result
from reply_suggester.utils.json_parser import loads_strict

logger = logging.getLogger(__name__)


class SuggestionService:
    """Issues exactly one POST per request; never retries, never raises."""

    def __init__(self, http: HttpClient, config: OllamaConfig | None = None):
        self.http = http
        self.config = config or OllamaConfig()

    def build_request(self, prompt: str) -> GenerateRequest:
        return GenerateRequest(
            model=self.config.model,
            prompt=prompt,
            options=GenerateOptions(temperature=self.config.temperature),
        )

    async def fetch_suggestion(self, prompt: str) -> SuggestionResult:
        request_id = uuid.uuid4().hex
        payload = self.build_request(prompt).to_payload()
        logger.info("Ollama request %s -> %s (model=%s)", request_id, self.config.endpoint, payload["model"])
        logger.debug("Request %s payload: %s", request_id, payload)

        started = time.monotonic()
        try:
            response = await self.http.post(self.config.endpoint, payload)
            logger.info(
                "Ollama request %s: status %d in %.2fs",
                request_id, response.status, time.monotonic() - started,
            )
            if not response.ok:
                raise ApiError(response.status, response.body_text)

            data = loads_strict(response.body_text)
            logger.debug("Request %s raw response: %s", request_id, data)
            return extract_result(data)
        except Exception as e:
            logger.error("Failed to fetch suggestion (request %s): %s", request_id, e, exc_info=True)
            return SuggestionResult.failure(str(e) or type(e).__name__)
