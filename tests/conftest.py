"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from fakes import FakeElement, FakePage, make_editor
from reply_suggester.models.suggestion import SuggestionReply
from reply_suggester.pipeline.messaging import SuggestionChannel


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def editor() -> FakeElement:
    return make_editor()


@pytest.fixture
def mock_channel() -> SuggestionChannel:
    """Create a mock channel that answers with a fixed suggestion."""
    channel = AsyncMock()
    channel.send = AsyncMock(
        return_value=SuggestionReply(success=True, suggestion="Well said.")
    )
    return channel
