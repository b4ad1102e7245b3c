"""Interfaces the watcher and prompt builder need from a live page.

The core only talks to these protocols. ``dom.playwright_page`` implements
them over a real browser; tests implement them in memory.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol

MutationCallback = Callable[[], Awaitable[None]]
ClickCallback = Callable[[], Awaitable[None]]


class Element(Protocol):
    async def query_selector(self, selector: str) -> Element | None: ...

    async def query_selector_all(self, selector: str) -> list[Element]: ...

    async def closest(self, selector: str) -> Element | None: ...

    async def inner_text(self) -> str: ...

    async def get_attribute(self, name: str) -> str | None: ...

    async def set_attribute(self, name: str, value: str) -> None: ...

    async def insert_before(self, node: Control, reference: Element) -> None: ...

    async def prepend(self, node: Control) -> None: ...

    async def replace_with_paragraph(self, text: str) -> None:
        """Replace all children with a single ``<p>`` holding ``text`` as text."""
        ...

    async def dispatch_input_event(self) -> None:
        """Fire a bubbling ``input`` event so the host page notices the edit."""
        ...


class Control(Protocol):
    """The injected suggest button."""

    async def get_label(self) -> str: ...

    async def set_label(self, label: str) -> None: ...

    async def set_disabled(self, disabled: bool) -> None: ...

    async def get_classes(self) -> list[str]: ...

    async def set_classes(self, classes: list[str]) -> None: ...

    async def add_class(self, name: str) -> None: ...


class Page(Protocol):
    @property
    def root(self) -> Element: ...

    async def create_control(
        self, label: str, classes: list[str], on_click: ClickCallback
    ) -> Control: ...

    async def subscribe(self, callback: MutationCallback) -> None:
        """Call ``callback`` whenever the subtree under ``root`` changes."""
        ...

    async def notify(self, message: str) -> None:
        """Show a user-visible notice."""
        ...
