"""Run the editor watcher inside a visible Chromium window using Playwright."""

from __future__ import annotations

import logging

from rich.console import Console

from reply_suggester.clients.ollama_client import OllamaClient
from reply_suggester.config import AppConfig
from reply_suggester.dom.playwright_page import PlaywrightPage
from reply_suggester.pipeline.editor_watcher import EditorWatcher
from reply_suggester.pipeline.messaging import InProcessChannel
from reply_suggester.pipeline.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)


async def watch_page(url: str, config: AppConfig, console: Console | None = None) -> int:
    """Open the URL, watch for comment editors, and wait.

    The browser stays open until the user closes it manually. A persistent
    profile is used so a LinkedIn login survives between runs.
    Returns the number of editors that were processed.
    """
    from playwright.async_api import async_playwright

    user_data_dir = config.browser.resolved_user_data_dir
    user_data_dir.mkdir(parents=True, exist_ok=True)

    async with OllamaClient(timeout=config.ollama.timeout) as http, async_playwright() as p:
        service = SuggestionService(http, config.ollama)
        context = await p.chromium.launch_persistent_context(
            str(user_data_dir),
            headless=config.browser.headless,
        )
        page = context.pages[0] if context.pages else await context.new_page()

        dom = PlaywrightPage(page, console=console)
        await dom.install()
        await page.goto(url, wait_until="domcontentloaded", timeout=60000)

        watcher = EditorWatcher(dom, InProcessChannel(service), config.watcher)
        await watcher.start()
        logger.info("Watching %s for comment editors", url)

        # Wait until user closes the browser window
        await context.wait_for_event("close", timeout=0)
        await watcher.drain()

    return len(watcher.processed)
