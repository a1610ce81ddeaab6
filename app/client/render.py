"""Display preparation for history entries.

Text results:
    1. Every `\\boxed{...}` wrapper emitted by reasoning models is removed and
       its inner content kept (non-greedy, so the first closing brace ends it).
    2. If the whole cleaned payload is one ```` ```text ```` fenced block, its
       inner text is shown literally (`plain`).
    3. Otherwise the cleaned text goes to the markdown renderer (`markdown`).

Image results:
    Shown as a linked thumbnail (`image`, body is the URL).

Markdown, syntax highlighting and math rendering themselves are left to the
front-end; this module only decides what each front-end receives.
"""

import re
from dataclasses import dataclass

from app.core.routing_types import Mode

BOXED_PATTERN = re.compile(r"\\boxed\{(.*?)\}", re.DOTALL)
TEXT_BLOCK_PATTERN = re.compile(r"```text\n(.*?)```", re.DOTALL)

PLAIN = "plain"
MARKDOWN = "markdown"
IMAGE = "image"


@dataclass(frozen=True)
class RenderedResult:
    kind: str
    body: str


def strip_boxed(text: str) -> str:
    return BOXED_PATTERN.sub(r"\1", text)


def render_text(text: str) -> RenderedResult:
    cleaned = strip_boxed(text)

    match = TEXT_BLOCK_PATTERN.fullmatch(cleaned)
    if match:
        return RenderedResult(PLAIN, match.group(1))

    return RenderedResult(MARKDOWN, cleaned)


def render_image(url: str) -> RenderedResult:
    return RenderedResult(IMAGE, url)


def render_entry(entry) -> RenderedResult:
    """Render a history entry according to the mode it was generated in."""
    if entry.mode == Mode.TEXT:
        return render_text(entry.result)
    return render_image(entry.result)
