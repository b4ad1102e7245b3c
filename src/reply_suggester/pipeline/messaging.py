"""The fetchSuggestion message boundary between the page side and the service side."""

from __future__ import annotations

import logging
from typing import Protocol

from pydantic import ValidationError

from reply_suggester.models.suggestion import (
    FETCH_SUGGESTION,
    SuggestionMessage,
    SuggestionReply,
)
from reply_suggester.pipeline.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)


async def handle_message(service: SuggestionService, message: dict) -> dict:
    """Answer one message. The reply is only produced once the fetch resolves.

    Never raises: malformed or unknown messages get ``{success: False, error}``.
    """
    try:
        request = SuggestionMessage.model_validate(message)
    except ValidationError as e:
        logger.warning("Malformed message: %s", e)
        return SuggestionReply(success=False, error="Malformed message").to_message()

    if request.action != FETCH_SUGGESTION:
        logger.warning("Unknown action: %s", request.action)
        return SuggestionReply(success=False, error=f"Unknown action: {request.action}").to_message()

    result = await service.fetch_suggestion(request.prompt)
    return SuggestionReply.from_result(result).to_message()


class SuggestionChannel(Protocol):
    async def send(self, message: SuggestionMessage) -> SuggestionReply: ...


class InProcessChannel:
    """Delivers messages straight to ``handle_message`` in the same event loop."""

    def __init__(self, service: SuggestionService):
        self.service = service

    async def send(self, message: SuggestionMessage) -> SuggestionReply:
        reply = await handle_message(self.service, message.model_dump())
        return SuggestionReply.model_validate(reply)
