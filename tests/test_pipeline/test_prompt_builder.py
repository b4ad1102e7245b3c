"""Tests for prompt_builder."""

from reply_suggester.pipeline.prompt_builder import (
    RULES_BLOCK,
    build_prompt,
    find_post,
    format_prompt,
)
from fakes import FakeElement, make_editor, make_post


class TestBuildPrompt:
    async def test_author_and_content(self, editor):
        make_post(editor, author="Jane Doe", content="Great insight!")
        prompt = await build_prompt(editor)
        assert prompt == (
            'Please write a reply for this LinkedIn post: "Great insight!" by "Jane Doe".'
            + RULES_BLOCK
        )

    async def test_text_is_trimmed(self, editor):
        make_post(editor, author="  Jane Doe \n", content="\n Great insight!  ")
        prompt = await build_prompt(editor)
        assert prompt.startswith('Please write a reply for this LinkedIn post: "Great insight!" by "Jane Doe".')

    async def test_missing_author(self, editor):
        make_post(editor, author=None, content="Hello world")
        prompt = await build_prompt(editor)
        assert prompt.startswith(
            'Please write a reply for this LinkedIn post: "Hello world" by "an unknown author".'
        )

    async def test_missing_content(self, editor):
        make_post(editor, author="Jane Doe", content=None)
        prompt = await build_prompt(editor)
        assert prompt == 'Please write a reply for a LinkedIn post by "Jane Doe".' + RULES_BLOCK

    async def test_blank_content_counts_as_missing(self, editor):
        make_post(editor, author="Jane Doe", content="   ")
        prompt = await build_prompt(editor)
        assert prompt.startswith("Please write a reply for a LinkedIn post by")

    async def test_no_post_container(self, editor):
        FakeElement("section", children=[editor])
        prompt = await build_prompt(editor)
        assert prompt == 'Please write a reply for a LinkedIn post by "an unknown author".' + RULES_BLOCK

    async def test_search_result_container(self, editor):
        make_post(editor, container_class="reusable-search__result-container", author="Sam")
        prompt = await build_prompt(editor)
        assert 'by "Sam"' in prompt


class TestFindPost:
    async def test_priority_order_prefers_v2_over_nearer_legacy(self):
        editor = make_editor()
        inner = FakeElement("div", "feed-shared-update", children=[editor])
        outer = FakeElement("div", "feed-shared-update-v2", children=[inner])
        assert await find_post(editor) is outer

    async def test_legacy_container(self):
        editor = make_editor()
        legacy = FakeElement("div", "feed-shared-update", children=[editor])
        assert await find_post(editor) is legacy


class TestRulesBlock:
    def test_rules_cover_all_constraints(self):
        for phrase in (
            "special character",
            "DO NOT include link",
            "Write short reply",
            "greeting",
            "salutation",
            "closing statement",
            "disclaimers",
        ):
            assert phrase in RULES_BLOCK

    def test_rules_mention_escape_sequences_literally(self):
        assert "'\\n', '\\t'" in RULES_BLOCK

    def test_format_prompt_is_pure(self):
        assert format_prompt("c", "a") == format_prompt("c", "a")
