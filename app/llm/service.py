"""Prompt-to-payload adapter for text generation.

Architectural role:
    Implements the dispatcher's text backend. Builds the single-message
    payload for the fixed chat model and maps the first choice's message onto
    a `TextCompletion`.

Model call flow:
    prompt -> `build_payload` -> `client.send_chat_completion` ->
    `client.first_choice_message` -> `TextCompletion`.

Token behavior:
    No token-budget parameters are sent; provider defaults apply.

Reasoning extraction:
    Reasoning models expose their chain of thought next to the answer, as
    `reasoning` on OpenRouter or `reasoning_content` on DeepSeek-style APIs.
    Whichever is present (and non-empty) is returned; otherwise `None`.
"""

from app.core.routing_types import TextCompletion
from app.llm.client import first_choice_message, send_chat_completion
from app.llm.provider_config import Settings

REASONING_FIELDS = ("reasoning", "reasoning_content")


def build_payload(prompt: str, model: str) -> dict:
    """Wrap `prompt` as the only user message for `model`."""
    return {
        "model": model,
        "messages": [
            {"role": "user", "content": prompt},
        ],
    }


def extract_reasoning(message: dict) -> str | None:
    for field in REASONING_FIELDS:
        value = message.get(field)
        if isinstance(value, str) and value.strip():
            return value
    return None


class ChatCompletionBackend:
    """Text backend talking to an OpenAI-compatible gateway."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def complete_text(self, prompt: str) -> TextCompletion | None:
        """Generate a completion for `prompt`.

        Returns:
            `TextCompletion`, or `None` when the gateway answered without a
            first-choice message.

        Failure scenarios:
            Transport and provider errors propagate from `client`.
        """
        settings = self.settings
        data = send_chat_completion(
            build_payload(prompt, settings.text_model),
            base_url=settings.openrouter_base_url,
            api_key=settings.openrouter_api_key,
            headers=settings.default_headers,
            timeout=settings.text_timeout_seconds,
        )

        message = first_choice_message(data)
        if message is None:
            return None

        content = message.get("content")
        return TextCompletion(
            content="" if content is None else str(content),
            reasoning=extract_reasoning(message),
        )
