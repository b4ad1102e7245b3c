"""Playwright implementation of the page protocols.

Element operations run as small ``evaluate`` snippets on live handles.
Mutation and click notifications come back into Python through bindings
exposed on the page with ``expose_binding``.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING

from rich.console import Console

from reply_suggester.dom.protocols import ClickCallback, MutationCallback

if TYPE_CHECKING:
    from playwright.async_api import ElementHandle
    from playwright.async_api import Page as PWPage

logger = logging.getLogger(__name__)

CLICK_BINDING = "__replySuggesterClick"
MUTATION_BINDING = "__replySuggesterMutation"

# Coalesces bursts of mutations into one binding call per macrotask.
OBSERVER_JS = """(binding) => {
    if (window.__replySuggesterObserver) return;
    let pending = false;
    const observer = new MutationObserver(() => {
        if (pending) return;
        pending = true;
        setTimeout(() => { pending = false; window[binding](); }, 0);
    });
    const start = () => observer.observe(document.body, { childList: true, subtree: true });
    if (document.body) start();
    else document.addEventListener("DOMContentLoaded", start);
    window.__replySuggesterObserver = observer;
}"""

# Non-blocking notice; alert() would be auto-dismissed by Playwright.
TOAST_JS = """([message, ttl]) => {
    const toast = document.createElement("div");
    toast.className = "reply-suggester-toast";
    toast.setAttribute("role", "status");
    toast.textContent = message;
    Object.assign(toast.style, {
        position: "fixed", bottom: "24px", right: "24px", zIndex: "2147483647",
        padding: "10px 14px", borderRadius: "6px", maxWidth: "360px",
        background: "#1d2226", color: "#fff", font: "14px sans-serif",
    });
    document.body.appendChild(toast);
    setTimeout(() => toast.remove(), ttl);
}"""
TOAST_TTL_MS = 5000

CREATE_CONTROL_JS = """([label, classes, id, binding]) => {
    const button = document.createElement("button");
    button.type = "button";
    button.innerText = label;
    button.classList.add(...classes);
    button.addEventListener("click", (event) => {
        event.preventDefault();
        window[binding](id);
    });
    return button;
}"""


class PlaywrightElement:
    def __init__(self, handle: ElementHandle):
        self.handle = handle

    @classmethod
    def wrap(cls, handle: ElementHandle | None) -> PlaywrightElement | None:
        return cls(handle) if handle is not None else None

    async def query_selector(self, selector: str) -> PlaywrightElement | None:
        return self.wrap(await self.handle.query_selector(selector))

    async def query_selector_all(self, selector: str) -> list[PlaywrightElement]:
        return [PlaywrightElement(h) for h in await self.handle.query_selector_all(selector)]

    async def closest(self, selector: str) -> PlaywrightElement | None:
        js_handle = await self.handle.evaluate_handle("(el, s) => el.closest(s)", selector)
        return self.wrap(js_handle.as_element())

    async def inner_text(self) -> str:
        return await self.handle.inner_text()

    async def get_attribute(self, name: str) -> str | None:
        return await self.handle.get_attribute(name)

    async def set_attribute(self, name: str, value: str) -> None:
        await self.handle.evaluate("(el, [n, v]) => el.setAttribute(n, v)", [name, value])

    async def insert_before(self, node: PlaywrightElement, reference: PlaywrightElement) -> None:
        await self.handle.evaluate(
            "(el, [n, r]) => el.insertBefore(n, r)", [node.handle, reference.handle]
        )

    async def prepend(self, node: PlaywrightElement) -> None:
        await self.handle.evaluate("(el, n) => el.prepend(n)", node.handle)

    async def replace_with_paragraph(self, text: str) -> None:
        await self.handle.evaluate(
            """(el, t) => {
                const p = document.createElement("p");
                p.textContent = t;
                el.replaceChildren(p);
            }""",
            text,
        )

    async def dispatch_input_event(self) -> None:
        await self.handle.dispatch_event("input", {"bubbles": True})


class PlaywrightControl(PlaywrightElement):
    async def get_label(self) -> str:
        return await self.handle.evaluate("el => el.innerText")

    async def set_label(self, label: str) -> None:
        await self.handle.evaluate("(el, t) => { el.innerText = t; }", label)

    async def set_disabled(self, disabled: bool) -> None:
        await self.handle.evaluate("(el, d) => { el.disabled = d; }", disabled)

    async def get_classes(self) -> list[str]:
        return await self.handle.evaluate("el => Array.from(el.classList)")

    async def set_classes(self, classes: list[str]) -> None:
        await self.handle.evaluate("(el, c) => { el.className = c.join(' '); }", classes)

    async def add_class(self, name: str) -> None:
        await self.handle.evaluate("(el, c) => el.classList.add(c)", name)


class _DocumentRoot:
    """Queries against whatever document the page currently shows."""

    def __init__(self, page: PWPage):
        self.page = page

    async def query_selector(self, selector: str) -> PlaywrightElement | None:
        return PlaywrightElement.wrap(await self.page.query_selector(selector))

    async def query_selector_all(self, selector: str) -> list[PlaywrightElement]:
        return [PlaywrightElement(h) for h in await self.page.query_selector_all(selector)]


class PlaywrightPage:
    """A ``Page`` over a Playwright page; call ``install()`` before use."""

    def __init__(self, page: PWPage, console: Console | None = None):
        self.page = page
        self.console = console or Console()
        self._root = _DocumentRoot(page)
        self._click_handlers: dict[str, ClickCallback] = {}
        self._mutation_callbacks: list[MutationCallback] = []

    @property
    def root(self) -> _DocumentRoot:
        return self._root

    async def install(self) -> None:
        await self.page.expose_binding(CLICK_BINDING, self._on_click)
        await self.page.expose_binding(MUTATION_BINDING, self._on_mutation)

    async def create_control(
        self, label: str, classes: list[str], on_click: ClickCallback
    ) -> PlaywrightControl:
        control_id = uuid.uuid4().hex
        self._click_handlers[control_id] = on_click
        js_handle = await self.page.evaluate_handle(
            CREATE_CONTROL_JS, [label, classes, control_id, CLICK_BINDING]
        )
        return PlaywrightControl(js_handle.as_element())

    async def subscribe(self, callback: MutationCallback) -> None:
        first = not self._mutation_callbacks
        self._mutation_callbacks.append(callback)
        if first:
            # Re-armed on every navigation; also armed on the current document.
            await self.page.add_init_script(f"({OBSERVER_JS})({json.dumps(MUTATION_BINDING)})")
            await self.page.evaluate(OBSERVER_JS, MUTATION_BINDING)

    async def notify(self, message: str) -> None:
        logger.info("Notice: %s", message)
        self.console.print(f"[yellow]{message}[/yellow]")
        try:
            await self.page.evaluate(TOAST_JS, [message, TOAST_TTL_MS])
        except Exception as e:
            logger.warning("Could not show notice on page: %s", e)

    async def _on_click(self, source: dict, control_id: str) -> None:
        handler = self._click_handlers.get(control_id)
        if handler is None:
            logger.debug("Click from unknown control %s", control_id)
            return
        await handler()

    async def _on_mutation(self, source: dict) -> None:
        for callback in list(self._mutation_callbacks):
            await callback()
