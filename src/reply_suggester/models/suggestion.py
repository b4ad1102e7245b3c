"""Pydantic models for suggestion results and the fetchSuggestion message."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, model_validator

FETCH_SUGGESTION = "fetchSuggestion"


class SuggestionResult(BaseModel):
    """Outcome of one suggestion request.

    ``success`` always carries non-blank ``text``; ``empty`` is the soft
    "model answered but said nothing usable" outcome; ``failure`` carries the
    reason the request could not be completed.
    """

    status: Literal["success", "empty", "failure"]
    text: str | None = None
    reason: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_variant(self) -> SuggestionResult:
        if self.status == "success" and not (self.text and self.text.strip()):
            raise ValueError("success result requires non-empty text")
        return self

    @classmethod
    def success(cls, text: str) -> SuggestionResult:
        return cls(status="success", text=text.strip())

    @classmethod
    def empty(cls) -> SuggestionResult:
        return cls(status="empty")

    @classmethod
    def failure(cls, reason: str) -> SuggestionResult:
        return cls(status="failure", reason=reason)

    @property
    def ok(self) -> bool:
        return self.status != "failure"


class SuggestionMessage(BaseModel):
    """Content-side request: ``{action: "fetchSuggestion", prompt}``."""

    action: str
    prompt: str


class SuggestionReply(BaseModel):
    """Service-side reply: ``{success, suggestion}`` or ``{success: false, error}``."""

    success: bool
    suggestion: str | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: SuggestionResult) -> SuggestionReply:
        if result.status == "failure":
            return cls(success=False, error=result.reason)
        return cls(success=True, suggestion=result.text)

    def to_message(self) -> dict:
        if self.success:
            return {"success": True, "suggestion": self.suggestion}
        return {"success": False, "error": self.error}
