"""Generation request/result contracts shared by the dispatcher and client.

Architectural role:
    Defines the mode enumeration and the transient value objects passed
    between `app.core.dispatcher`, the provider services and the interaction
    client. None of these objects are persisted.

Mode resolution:
    `resolve_mode` maps a raw wire value to a `Mode`. Only the literal
    `"text"` selects text generation; everything else, including a missing
    value, selects image generation unless strict validation is requested.
"""

from dataclasses import dataclass
from enum import Enum

from app.core.errors import InvalidModeError


class Mode(str, Enum):
    TEXT = "text"
    IMAGE = "image"


def resolve_mode(raw, strict: bool = False) -> Mode:
    """Map a raw request value onto `Mode`.

    Args:
        raw: Value taken from the request body (may be `None` or any string).
        strict: Reject anything other than the two known values.

    Raises:
        InvalidModeError: `strict` is set and `raw` is not a known mode.
    """
    if raw == Mode.TEXT.value:
        return Mode.TEXT
    if strict and raw != Mode.IMAGE.value:
        raise InvalidModeError(raw)
    return Mode.IMAGE


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    mode: Mode


@dataclass(frozen=True)
class TextCompletion:
    """First-choice message content plus optional reasoning text."""

    content: str
    reasoning: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    """Normalized provider output.

    Attributes:
        content: Markdown/code for text mode, an image URL for image mode.
        reasoning: Auxiliary reasoning text (text mode only) or `None`.
    """

    content: str
    reasoning: str | None = None

    def to_dict(self) -> dict:
        return {"content": self.content, "reasoning": self.reasoning}
