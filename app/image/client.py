"""HTTP client for a hosted Gradio inference space.

Processing flow:
    1. Resolve the space's base URL from its `<owner>/<name>` id.
    2. Submit the positional input list to `/gradio_api/call/<endpoint>`.
    3. Read the returned `event_id`.
    4. Stream `/gradio_api/call/<endpoint>/<event_id>` until a terminal event.
    5. Return the decoded output list of the `complete` event.

Event stream format:
    Line-delimited `event: <name>` / `data: <json>` pairs. `generating` and
    `heartbeat` events are skipped; `complete` carries the output list;
    `error` terminates the call.

Error handling strategy:
    - HTTP failures propagate via `requests.raise_for_status()`.
    - Missing event id, `error` events and a stream that ends without a
      terminal event raise `UpstreamCallError`.

Performance characteristics:
    - Synchronous HTTP; one blocking streamed read per prediction.
    - Every request carries the caller's timeout, so a stalled space cannot
      hold the worker indefinitely.
"""

import json
import logging

import requests

from app.core.errors import UpstreamCallError

logger = logging.getLogger(__name__)

PROVIDER_LABEL = "gradio"
HF_SPACE_DOMAIN = "hf.space"


def space_base_url(space: str) -> str:
    """Map a space id such as `black-forest-labs/FLUX.1-dev` to its host URL.

    Full `http(s)://` URLs are returned unchanged (minus a trailing slash).
    """
    if space.startswith(("http://", "https://")):
        return space.rstrip("/")

    subdomain = space.strip("/").lower()
    for char in ("/", ".", "_"):
        subdomain = subdomain.replace(char, "-")
    return f"https://{subdomain}.{HF_SPACE_DOMAIN}"


def _auth_headers(token: str | None) -> dict:
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _call_url(base_url: str, endpoint: str) -> str:
    return f"{base_url}/gradio_api/call/{endpoint.strip('/')}"


def submit_prediction(
    base_url: str,
    endpoint: str,
    data: list,
    *,
    token: str | None,
    timeout: float,
) -> str:
    """Queue one prediction and return its event id."""
    response = requests.post(
        _call_url(base_url, endpoint),
        headers=_auth_headers(token),
        json={"data": data},
        timeout=timeout,
    )
    response.raise_for_status()

    event_id = response.json().get("event_id")
    if not event_id:
        raise UpstreamCallError(PROVIDER_LABEL, "Inference space did not return an event id.")
    return event_id


def iter_events(lines):
    """Pair `event:` and `data:` lines from a decoded line iterator.

    Yields:
        `(event_name, raw_data)` tuples, with `raw_data` left undecoded.
    """
    event = None
    for line in lines:
        if not line:
            continue
        if line.startswith("event:"):
            event = line[len("event:"):].strip()
        elif line.startswith("data:"):
            yield event, line[len("data:"):].strip()
            event = None


def _error_text(raw: str) -> str:
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = raw

    if isinstance(decoded, dict):
        decoded = decoded.get("message") or decoded.get("error")
    if decoded:
        return f"Inference space error: {decoded}"
    return "Inference space reported an error."


def await_prediction(
    base_url: str,
    endpoint: str,
    event_id: str,
    *,
    token: str | None,
    timeout: float,
) -> list:
    """Stream the result of a queued prediction.

    Returns:
        Decoded output list of the `complete` event.

    Raises:
        UpstreamCallError: `error` event, undecodable output, or a stream that
            closes before completing.
    """
    url = f"{_call_url(base_url, endpoint)}/{event_id}"

    with requests.get(
        url,
        headers=_auth_headers(token),
        stream=True,
        timeout=timeout,
    ) as response:
        response.raise_for_status()
        response.encoding = "utf-8"

        for event, raw in iter_events(response.iter_lines(decode_unicode=True)):
            if event == "error":
                raise UpstreamCallError(PROVIDER_LABEL, _error_text(raw))

            if event != "complete":
                continue

            try:
                output = json.loads(raw)
            except ValueError:
                raise UpstreamCallError(
                    PROVIDER_LABEL, "Inference space returned undecodable output."
                )
            return output if isinstance(output, list) else [output]

    raise UpstreamCallError(PROVIDER_LABEL, "Inference stream ended before completion.")


def predict(
    space: str,
    endpoint: str,
    data: list,
    *,
    token: str | None,
    timeout: float,
) -> list:
    """Submit and await one prediction on `space`."""
    base_url = space_base_url(space)
    event_id = submit_prediction(base_url, endpoint, data, token=token, timeout=timeout)
    logger.debug("Queued %s%s as event %s", base_url, endpoint, event_id)
    return await_prediction(base_url, endpoint, event_id, token=token, timeout=timeout)


def first_result_url(output) -> str | None:
    """Return the `url` of the first output item, if it exposes one."""
    if not output:
        return None

    item = output[0]
    if isinstance(item, dict):
        url = item.get("url")
        if not url and isinstance(item.get("image"), dict):
            url = item["image"].get("url")
        return url or None
    return None
