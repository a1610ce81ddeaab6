"""Result rendering tests."""

from app.client.render import (
    IMAGE,
    MARKDOWN,
    PLAIN,
    RenderedResult,
    render_entry,
    render_text,
    strip_boxed,
)
from app.client.session import HistoryEntry
from app.core.routing_types import Mode


def test_boxed_answer_renders_like_inner_content():
    assert render_text("\\boxed{42}") == render_text("42")


def test_strip_boxed_keeps_surrounding_text():
    assert strip_boxed("The answer is \\boxed{42}.") == "The answer is 42."


def test_strip_boxed_handles_multiple_and_multiline():
    assert strip_boxed("\\boxed{a}\n\\boxed{b\nc}") == "a\nb\nc"


def test_text_fenced_block_renders_literally():
    rendered = render_text("```text\n# not a heading\n*raw*\n```")

    assert rendered == RenderedResult(PLAIN, "# not a heading\n*raw*\n")


def test_text_fence_must_wrap_whole_payload():
    payload = "Intro\n```text\nbody\n```"

    assert render_text(payload) == RenderedResult(MARKDOWN, payload)


def test_text_fence_detected_after_boxed_removal():
    rendered = render_text("```text\n\\boxed{42}\n```")

    assert rendered == RenderedResult(PLAIN, "42\n")


def test_other_fences_stay_markdown():
    payload = "```python\nprint('hi')\n```"

    assert render_text(payload).kind == MARKDOWN


def test_render_entry_by_mode():
    text_entry = HistoryEntry("q", Mode.TEXT, "**bold**")
    image_entry = HistoryEntry("p", Mode.IMAGE, "https://x/y.webp")

    assert render_entry(text_entry) == RenderedResult(MARKDOWN, "**bold**")
    assert render_entry(image_entry) == RenderedResult(IMAGE, "https://x/y.webp")
