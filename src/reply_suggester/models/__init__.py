"""Data models for the reply suggestion pipeline."""

from reply_suggester.models.ollama import GenerateOptions, GenerateRequest, ResponseFormat
from reply_suggester.models.suggestion import (
    FETCH_SUGGESTION,
    SuggestionMessage,
    SuggestionReply,
    SuggestionResult,
)

__all__ = [
    "FETCH_SUGGESTION",
    "GenerateOptions",
    "GenerateRequest",
    "ResponseFormat",
    "SuggestionMessage",
    "SuggestionReply",
    "SuggestionResult",
]
