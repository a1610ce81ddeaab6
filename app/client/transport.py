"""HTTP transport from the interaction surface to the dispatcher."""

import requests

from app.llm.provider_config import DISPATCHER_URL

# Image generation can take minutes on a busy space.
DEFAULT_TIMEOUT_SECONDS = 330.0


class DispatcherTransport:
    """POST `{prompt, mode}` to the dispatcher and return the decoded body."""

    def __init__(self, url: str = DISPATCHER_URL, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.url = url
        self.timeout = timeout

    def send(self, prompt: str, mode: str) -> dict:
        """Return the JSON envelope regardless of HTTP status.

        Error envelopes arrive with status 400/500 and are returned like
        successes; only transport failures and undecodable bodies raise
        (`requests.exceptions.RequestException`).
        """
        response = requests.post(
            self.url,
            headers={"Content-Type": "application/json"},
            json={"prompt": prompt, "mode": mode},
            timeout=self.timeout,
        )
        return response.json()
