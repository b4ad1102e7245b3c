"""Tests for the Playwright adapter wiring (mocked page, no browser)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from rich.console import Console

from reply_suggester.dom.playwright_page import (
    CLICK_BINDING,
    MUTATION_BINDING,
    TOAST_JS,
    TOAST_TTL_MS,
    PlaywrightControl,
    PlaywrightElement,
    PlaywrightPage,
)


def _mock_page() -> MagicMock:
    page = MagicMock()
    page.expose_binding = AsyncMock()
    page.add_init_script = AsyncMock()
    page.evaluate = AsyncMock()
    js_handle = MagicMock()
    js_handle.as_element.return_value = MagicMock()
    page.evaluate_handle = AsyncMock(return_value=js_handle)
    page.query_selector_all = AsyncMock(return_value=[MagicMock(), MagicMock()])
    page.query_selector = AsyncMock(return_value=None)
    return page


class TestPlaywrightPage:
    async def test_install_exposes_bindings(self):
        page = _mock_page()
        await PlaywrightPage(page).install()
        names = [c.args[0] for c in page.expose_binding.await_args_list]
        assert names == [CLICK_BINDING, MUTATION_BINDING]

    async def test_click_binding_routes_to_control_handler(self):
        page = _mock_page()
        dom = PlaywrightPage(page)
        on_click = AsyncMock()

        control = await dom.create_control("✍️", ["a", "b"], on_click)
        control_id = page.evaluate_handle.await_args.args[1][2]
        await dom._on_click({}, control_id)

        assert isinstance(control, PlaywrightControl)
        on_click.assert_awaited_once()

    async def test_unknown_click_is_ignored(self):
        dom = PlaywrightPage(_mock_page())
        await dom._on_click({}, "missing")

    async def test_subscribe_arms_observer_once(self):
        page = _mock_page()
        dom = PlaywrightPage(page)
        first, second = AsyncMock(), AsyncMock()

        await dom.subscribe(first)
        await dom.subscribe(second)
        await dom._on_mutation({})

        page.add_init_script.assert_awaited_once()
        page.evaluate.assert_awaited_once()
        first.assert_awaited_once()
        second.assert_awaited_once()

    async def test_root_queries_current_document(self):
        page = _mock_page()
        dom = PlaywrightPage(page)

        found = await dom.root.query_selector_all(".comments-comment-texteditor")
        missing = await dom.root.query_selector(".nothing")

        assert len(found) == 2
        assert all(isinstance(el, PlaywrightElement) for el in found)
        assert missing is None

    async def test_notify_prints_to_console(self):
        console = Console(record=True)
        dom = PlaywrightPage(_mock_page(), console=console)
        await dom.notify("Could not generate a suggestion. Please try again.")
        assert "Could not generate a suggestion" in console.export_text()

    async def test_notify_shows_toast_on_page(self):
        page = _mock_page()
        dom = PlaywrightPage(page, console=Console(record=True))
        await dom.notify("Failed to get suggestion: boom")

        page.evaluate.assert_awaited_once()
        script, (message, ttl) = page.evaluate.await_args.args
        assert script == TOAST_JS
        assert message == "Failed to get suggestion: boom"
        assert ttl == TOAST_TTL_MS
        assert "textContent" in TOAST_JS
        assert "innerHTML" not in TOAST_JS

    async def test_notify_survives_closed_page(self):
        page = _mock_page()
        page.evaluate = AsyncMock(side_effect=RuntimeError("Target page has been closed"))
        console = Console(record=True)
        dom = PlaywrightPage(page, console=console)
        await dom.notify("An unexpected error occurred. Please try again.")
        assert "An unexpected error occurred" in console.export_text()


class TestPlaywrightElement:
    async def test_closest_returns_none_when_no_match(self):
        handle = MagicMock()
        js_handle = MagicMock()
        js_handle.as_element.return_value = None
        handle.evaluate_handle = AsyncMock(return_value=js_handle)

        assert await PlaywrightElement(handle).closest(".feed-shared-update") is None

    async def test_replace_with_paragraph_passes_text_as_argument(self):
        handle = MagicMock()
        handle.evaluate = AsyncMock()
        await PlaywrightElement(handle).replace_with_paragraph("<b>not markup</b>")
        assert handle.evaluate.await_args.args[1] == "<b>not markup</b>"
        assert "textContent" in handle.evaluate.await_args.args[0]
