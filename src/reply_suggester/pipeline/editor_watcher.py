"""Attach a suggest control to every LinkedIn comment editor on a page."""

from __future__ import annotations

import asyncio
import logging
import uuid

from reply_suggester.config import WatcherConfig
from reply_suggester.dom.protocols import Control, Element, Page
from reply_suggester.models.suggestion import (
    FETCH_SUGGESTION,
    SuggestionMessage,
    SuggestionReply,
)
from reply_suggester.pipeline.messaging import SuggestionChannel
from reply_suggester.pipeline.prompt_builder import build_prompt

logger = logging.getLogger(__name__)

EDITOR_SELECTOR = ".comments-comment-texteditor"
ACTIONS_CONTAINER_SELECTOR = ".display-flex.justify-space-between > .display-flex"
ACTIONS_SLOT_SELECTOR = "div"
RICH_TEXT_SELECTOR = ".ql-editor"
LOADING_CLASS = "loading-state"

BUTTON_CLASSES: list[str] = [
    "artdeco-button",
    "artdeco-button--circle",
    "artdeco-button--muted",
    "artdeco-button--2",
    "artdeco-button--tertiary",
    "comments-comment-box__emoji-picker-trigger",
    "my-suggestion-button",
]

EMPTY_NOTICE = "Could not generate a suggestion. Please try again."
UNEXPECTED_NOTICE = "An unexpected error occurred. Please try again."
UNKNOWN_ERROR = "Unknown error. Check logs."


class EditorWatcher:
    """Watches a page for comment editors and runs suggestion activations.

    Each editor is marked with ``config.marker_attribute`` (a token issued by
    this watcher) before its control is attached, so repeated or overlapping
    mutation notifications attach at most one control per editor.
    """

    def __init__(
        self,
        page: Page,
        channel: SuggestionChannel,
        config: WatcherConfig | None = None,
    ):
        self.page = page
        self.channel = channel
        self.config = config or WatcherConfig()
        self.processed: set[str] = set()
        self._scan_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

    @property
    def unprocessed_selector(self) -> str:
        return f"{EDITOR_SELECTOR}:not([{self.config.marker_attribute}])"

    async def start(self) -> None:
        await self.page.subscribe(self.on_mutation)
        await self.on_mutation()

    async def on_mutation(self) -> None:
        async with self._scan_lock:
            editors = await self.page.root.query_selector_all(self.unprocessed_selector)
            for editor in editors:
                if await editor.get_attribute(self.config.marker_attribute) in self.processed:
                    continue
                token = uuid.uuid4().hex
                await editor.set_attribute(self.config.marker_attribute, token)
                self.processed.add(token)
                await self.attach_control(editor)

    async def attach_control(self, editor: Element) -> Control | None:
        container = await editor.query_selector(ACTIONS_CONTAINER_SELECTOR)
        if container is None:
            logger.debug("No action-button container found; editor left without a control")
            return None

        control: Control | None = None

        async def on_click() -> None:
            self._spawn(editor, control)

        control = await self.page.create_control(
            self.config.button_label, list(BUTTON_CLASSES), on_click
        )
        slot = await container.query_selector(ACTIONS_SLOT_SELECTOR)
        if slot is not None:
            await container.insert_before(control, slot)
        else:
            await container.prepend(control)
        return control

    def _spawn(self, editor: Element, control: Control) -> asyncio.Task:
        task = asyncio.create_task(self.on_activate(editor, control))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight activation to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def on_activate(self, editor: Element, control: Control) -> SuggestionReply | None:
        original_label = await control.get_label()
        original_classes = await control.get_classes()

        try:
            await control.set_label(self.config.loading_label)
            await control.set_disabled(True)
            await control.add_class(LOADING_CLASS)

            prompt = await build_prompt(editor)
            reply = await self.channel.send(SuggestionMessage(action=FETCH_SUGGESTION, prompt=prompt))
            logger.debug("Response from suggestion service: %s", reply)

            if reply.success:
                if reply.suggestion:
                    await self.write_reply(editor, reply.suggestion)
                else:
                    logger.warning("Suggestion service returned no suggestion text.")
                    await self.page.notify(EMPTY_NOTICE)
            else:
                logger.error("Error from suggestion service: %s", reply.error or "Unknown error")
                await self.page.notify(f"Failed to get suggestion: {reply.error or UNKNOWN_ERROR}")
            return reply
        except Exception:
            logger.error("Error during suggestion request", exc_info=True)
            await self.page.notify(UNEXPECTED_NOTICE)
            return None
        finally:
            await control.set_label(original_label)
            await control.set_disabled(False)
            await control.set_classes([c for c in original_classes if c != LOADING_CLASS])

    async def write_reply(self, editor: Element, text: str) -> bool:
        """Replace the editor's rich-text content; False when there is none."""
        content = await editor.query_selector(RICH_TEXT_SELECTOR)
        if content is None:
            logger.warning("Rich-text node missing; suggestion dropped")
            return False
        await content.replace_with_paragraph(text.strip())
        await content.dispatch_input_event()
        return True
