"""JSON helpers for model output."""

from __future__ import annotations

import json
from typing import Any

from reply_suggester.errors import ParseError


def loads_strict(text: str) -> Any:
    """Parse ``text`` as JSON, raising ParseError instead of JSONDecodeError."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ParseError(f"Invalid JSON: {str(text)[:100]}") from exc
