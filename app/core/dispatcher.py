"""Core request dispatch between the text and image backends.

Architectural role:
    Selects exactly one generation backend per request and normalizes the
    heterogeneous provider outputs into a `GenerationResult`. The HTTP layer
    (`app.api.http_api`) and tests call `dispatch`; neither knows which
    provider SDK or wire protocol sits behind a backend.

Control-flow model:
    1. `resolve_mode` maps the raw mode value (permissive unless strict).
    2. `Mode.TEXT` -> `TextBackend.complete_text`.
    3. Any other mode -> `ImageBackend.generate_image`.
    4. A missing message/URL raises `UpstreamShapeError`.

Error handling strategy:
    No exception is caught here. Transport errors, provider errors and shape
    errors all propagate to the single boundary in the HTTP layer.

Side effects:
    Only the outbound provider call. No state is kept between requests.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from app.core.errors import UpstreamShapeError
from app.core.routing_types import (
    GenerationRequest,
    GenerationResult,
    Mode,
    TextCompletion,
)
from app.image.service import GradioImageBackend
from app.llm.provider_config import Settings
from app.llm.service import ChatCompletionBackend

logger = logging.getLogger(__name__)


class TextBackend(Protocol):
    """Chat-completion provider as seen by the dispatcher."""

    def complete_text(self, prompt: str) -> TextCompletion | None:
        """Return the first-choice completion, or `None` if there is none."""
        ...


class ImageBackend(Protocol):
    """Image-inference provider as seen by the dispatcher."""

    def generate_image(self, prompt: str) -> str | None:
        """Return the first result's URL, or `None` if there is none."""
        ...


@dataclass(frozen=True)
class Backends:
    text: TextBackend
    image: ImageBackend


def build_backends(settings: Settings) -> Backends:
    """Construct the production backends from `settings`."""
    return Backends(
        text=ChatCompletionBackend(settings),
        image=GradioImageBackend(settings),
    )


def dispatch(request: GenerationRequest, backends: Backends) -> GenerationResult:
    """Run `request` against the backend its mode selects.

    Raises:
        UpstreamShapeError: provider answered without a message/URL.
        Exception: anything the backend raises, unchanged.
    """
    if request.mode is Mode.TEXT:
        completion = backends.text.complete_text(request.prompt)
        if completion is None:
            raise UpstreamShapeError("text")

        logger.info(
            "Text generation finished (chars=%d, reasoning=%s)",
            len(completion.content),
            completion.reasoning is not None,
        )
        return GenerationResult(content=completion.content, reasoning=completion.reasoning)

    image_url = backends.image.generate_image(request.prompt)
    if not image_url:
        raise UpstreamShapeError("image")

    logger.info("Image generation finished")
    return GenerationResult(content=image_url, reasoning=None)
