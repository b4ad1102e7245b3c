"""Build the LLM prompt from the LinkedIn post around a comment editor."""

from __future__ import annotations

from reply_suggester.dom.protocols import Element

POST_CONTAINER_SELECTORS: tuple[str, ...] = (
    ".feed-shared-update-v2",
    ".feed-shared-update",
    ".reusable-search__result-container",
)
AUTHOR_SELECTOR = ".update-components-actor__title .visually-hidden"
CONTENT_SELECTOR = ".fie-impression-container .feed-shared-inline-show-more-text"

UNKNOWN_AUTHOR = "an unknown author"

RULES_BLOCK = """
  RULES:
    1. DO NOT add '\\n', '\\t' or other special character.
    2. DO NOT include link.
    3. Write short reply.
    4. DO NOT write any greeting.
    5. DO NOT write any salutation.
    6. DO NOT write any closing statement.
    7. DO NOT write any disclaimers.
  """


async def find_post(editor: Element) -> Element | None:
    """Nearest enclosing post; container patterns are tried in priority order."""
    for selector in POST_CONTAINER_SELECTORS:
        post = await editor.closest(selector)
        if post is not None:
            return post
    return None


async def _text_of(container: Element | None, selector: str) -> str | None:
    if container is None:
        return None
    node = await container.query_selector(selector)
    if node is None:
        return None
    return (await node.inner_text()).strip() or None


def format_prompt(content: str | None, author: str | None) -> str:
    author = author or UNKNOWN_AUTHOR
    if not content:
        return f'Please write a reply for a LinkedIn post by "{author}".' + RULES_BLOCK
    return f'Please write a reply for this LinkedIn post: "{content}" by "{author}".' + RULES_BLOCK


async def build_prompt(editor: Element) -> str:
    post = await find_post(editor)
    author = await _text_of(post, AUTHOR_SELECTOR)
    content = await _text_of(post, CONTENT_SELECTOR)
    return format_prompt(content, author)
