"""Normalize an Ollama ``/api/generate`` payload into a single reply string.

The model is asked for ``{"reply": "..."}`` but does not always comply. The
``response`` field has been seen as:

  - a JSON string encoding ``{"reply": "..."}``
  - an already-decoded object
  - plain prose

The payload is first unwrapped into a ``ResponseShape``; an ordered list of
attempts is then run against it. Each attempt returns a definitive
``Extraction`` or ``None`` to hand over to the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from reply_suggester.errors import ParseError
from reply_suggester.models.suggestion import SuggestionResult
from reply_suggester.utils.json_parser import loads_strict

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class ResponseShape:
    """What the ``response`` field turned out to be.

    ``parsed`` is the object form (decoded JSON or the field itself);
    ``raw_text`` is set only when the field arrived as a string.
    """

    parsed: Any = _UNSET
    raw_text: str | None = None

    @property
    def has_object(self) -> bool:
        return self.parsed is not _UNSET


@dataclass(frozen=True)
class Extraction:
    """A definitive outcome. ``reply`` is None for "no reply"."""

    reply: str | None
    path: str


Attempt = Callable[[ResponseShape], "Extraction | None"]


def _no_reply(path: str) -> Extraction:
    return Extraction(reply=None, path=path)


def _from_text(value: str, path: str) -> Extraction:
    text = value.strip()
    return Extraction(reply=text or None, path=path)


def unwrap(payload: Any) -> ResponseShape | Extraction:
    """Turn the top-level payload into a shape, or a definitive no-reply."""
    if not isinstance(payload, dict):
        logger.warning("Ollama API response is not a valid object: %r", type(payload).__name__)
        return _no_reply("payload_not_object")

    inner = payload.get("response")
    if inner is None:
        logger.warning("The 'response' property is missing or null in the Ollama API data.")
        return _no_reply("response_missing")

    if isinstance(inner, str):
        try:
            return ResponseShape(parsed=loads_strict(inner), raw_text=inner)
        except ParseError:
            logger.warning("'response' is a string but not valid JSON; using it as raw text.")
            return ResponseShape(raw_text=inner)

    if isinstance(inner, (dict, list)):
        return ResponseShape(parsed=inner)

    logger.warning("'response' has an unexpected type: %s", type(inner).__name__)
    return _no_reply("response_unexpected_type")


def from_reply_field(shape: ResponseShape) -> Extraction | None:
    """``{"reply": "..."}`` in object form, decoded or native."""
    if not shape.has_object or not isinstance(shape.parsed, dict):
        return None
    if "reply" not in shape.parsed:
        return None

    reply = shape.parsed["reply"]
    if not isinstance(reply, str):
        logger.warning("The 'reply' property is not a string (got %s).", type(reply).__name__)
        return _no_reply("reply_not_string")

    extraction = _from_text(reply, "reply_field")
    if extraction.reply is None:
        logger.warning("The 'reply' property is an empty string.")
    return extraction


def from_raw_text(shape: ResponseShape) -> Extraction | None:
    """The ``response`` string itself, when no ``reply`` field was found."""
    if shape.raw_text is None:
        return None
    return _from_text(shape.raw_text, "raw_text")


ATTEMPTS: tuple[Attempt, ...] = (from_reply_field, from_raw_text)


def extract(payload: Any) -> Extraction:
    """Run the unwrap step and each attempt in order; first definitive wins."""
    shape = unwrap(payload)
    if isinstance(shape, Extraction):
        return shape

    for attempt in ATTEMPTS:
        extraction = attempt(shape)
        if extraction is not None:
            logger.debug("Extraction path=%s reply=%r", extraction.path, extraction.reply)
            return extraction

    logger.warning("Could not extract a valid 'reply' from the Ollama API response.")
    return _no_reply("no_match")


def extract_reply(payload: Any) -> str | None:
    """Return the trimmed, non-empty reply, or None when there is none."""
    return extract(payload).reply


def extract_result(payload: Any) -> SuggestionResult:
    """Like ``extract_reply`` but as a ``success``/``empty`` SuggestionResult."""
    reply = extract_reply(payload)
    if reply is None:
        return SuggestionResult.empty()
    return SuggestionResult.success(reply)
