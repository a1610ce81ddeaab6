"""Transport client for the OpenAI-compatible chat-completion gateway.

Architectural role:
    Executes the HTTP request against the configured gateway and exposes the
    first choice's message from the parsed body.

Model invocation flow:
    `service.ChatCompletionBackend.complete_text` -> `send_chat_completion(...)`
    -> parsed JSON body -> `first_choice_message(body)`.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with the
    configured timeout.

Failure handling model:
    - Transport failures (`requests` exceptions) propagate unchanged.
    - Non-2xx responses and in-body provider errors raise `UpstreamCallError`
      with a provider-labeled message.
    - A well-formed body without a usable first message is not an error here;
      `first_choice_message` returns `None` and the dispatcher decides.
"""

import logging

import requests

from app.core.errors import UpstreamCallError

logger = logging.getLogger(__name__)

PROVIDER_LABEL = "openrouter"


def _provider_error_detail(body) -> str | None:
    """Extract `error.message` (or a bare `error` string) from a gateway body."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else None
    if isinstance(error, str) and error.strip():
        return error.strip()
    return None


def _build_http_error(response: requests.Response) -> UpstreamCallError:
    """Build a provider-labeled error for a non-2xx gateway response."""
    try:
        detail = _provider_error_detail(response.json())
    except ValueError:
        detail = None

    label = PROVIDER_LABEL.upper()
    message = f"{label} HTTP ERROR ({response.status_code})"
    if detail:
        message = f"{message}: {detail}"
    return UpstreamCallError(PROVIDER_LABEL, message)


def send_chat_completion(
    payload: dict,
    *,
    base_url: str,
    api_key: str | None,
    headers: dict | None = None,
    timeout: float,
) -> dict:
    """POST one chat-completion request and return the parsed body.

    Args:
        payload: OpenAI-style request body (`model`, `messages`, ...).
        base_url: Gateway base URL, without the `/chat/completions` suffix.
        api_key: Bearer token; omitted from headers when `None`.
        headers: Extra default headers (attribution headers).
        timeout: Seconds before `requests` gives up on connect/read.

    Raises:
        requests.exceptions.RequestException: transport-level failure.
        UpstreamCallError: non-2xx status or an error object in the body.
    """
    url = base_url.rstrip("/") + "/chat/completions"

    request_headers = {"Content-Type": "application/json"}
    if headers:
        request_headers.update(headers)
    if api_key:
        request_headers["Authorization"] = f"Bearer {api_key}"

    logger.debug("POST %s model=%s", url, payload.get("model"))

    response = requests.post(
        url,
        headers=request_headers,
        json=payload,
        timeout=timeout,
    )

    if not response.ok:
        raise _build_http_error(response)

    data = response.json()

    detail = _provider_error_detail(data)
    if detail:
        raise UpstreamCallError(PROVIDER_LABEL, f"{PROVIDER_LABEL.upper()} ERROR: {detail}")

    return data


def first_choice_message(data) -> dict | None:
    """Return `choices[0].message` when present, else `None`."""
    if not isinstance(data, dict):
        return None

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    choice = choices[0]
    if not isinstance(choice, dict):
        return None

    message = choice.get("message")
    if not isinstance(message, dict) or not message:
        return None
    return message
