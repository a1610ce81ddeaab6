"""Per-view session state and submission protocol of the interaction surface.

State:
    prompt, history (newest first), mode, loading, error, reasoning and the
    reasoning-visibility toggle. Everything lives in memory for the lifetime
    of the session; nothing is persisted or removed from history.

Submission protocol (`ChatSession.submit`):
    1. Empty prompt -> local validation error, no network call.
    2. loading = True, error and reasoning cleared, request sent.
    3. Error envelope -> error stored, history unchanged.
    4. Result envelope -> entry prepended, reasoning stored, prompt cleared.
    5. Transport failure -> generic error message.
    6. loading cleared on every exit path.

Overlapping submissions:
    Each submission takes a monotonic sequence number. Only the most recent
    submission applies its outcome (steps 3-6); an older one that finishes
    later is discarded. A lock guards all state mutation so submissions may
    run from several threads.
"""

import itertools
import logging
import threading
from dataclasses import dataclass

import requests

from app.core.routing_types import Mode

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt"
NETWORK_FAILURE_MESSAGE = "Failed to generate content. Please try again."


@dataclass(frozen=True)
class HistoryEntry:
    prompt: str
    mode: Mode
    result: str


class ChatSession:
    """Client-side state for one page view.

    Args:
        transport: Object with `send(prompt, mode) -> dict` returning the
            dispatcher's JSON envelope (see `app.client.transport`).
        mode: Initial mode.
    """

    def __init__(self, transport, mode: Mode = Mode.TEXT):
        self.transport = transport

        self.prompt = ""
        self.history: list[HistoryEntry] = []
        self.mode = mode
        self.loading = False
        self.error: str | None = None
        self.reasoning: str | None = None
        self.show_reasoning = False

        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._latest = 0

    # =========================================================
    # Local controls
    # =========================================================

    def set_mode(self, mode: Mode) -> None:
        """Switch mode; a pending error message belongs to the old mode."""
        with self._lock:
            self.mode = Mode(mode)
            self.error = None

    def toggle_reasoning(self) -> bool:
        with self._lock:
            self.show_reasoning = not self.show_reasoning
            return self.show_reasoning

    # =========================================================
    # Submission
    # =========================================================

    def submit(self) -> HistoryEntry | None:
        """Send the current prompt and apply the outcome.

        Returns:
            The new `HistoryEntry` on success, otherwise `None` (validation
            error, error envelope, transport failure or superseded request).
        """
        with self._lock:
            prompt = self.prompt
            mode = self.mode

            if not prompt:
                self.error = EMPTY_PROMPT_MESSAGE
                return None

            seq = next(self._sequence)
            self._latest = seq
            self.loading = True
            self.error = None
            self.reasoning = None

        try:
            payload = self.transport.send(prompt, mode.value)
        except requests.exceptions.RequestException as err:
            logger.warning("Dispatcher request failed: %s", err)
            with self._lock:
                if self._is_current(seq):
                    self.error = NETWORK_FAILURE_MESSAGE
            return None
        finally:
            with self._lock:
                if self._is_current(seq):
                    self.loading = False

        return self._apply(seq, prompt, mode, payload)

    def _is_current(self, seq: int) -> bool:
        return seq == self._latest

    def _apply(self, seq, prompt, mode, payload) -> HistoryEntry | None:
        with self._lock:
            if not self._is_current(seq):
                logger.debug("Discarding superseded response #%d", seq)
                return None

            if not isinstance(payload, dict):
                self.error = NETWORK_FAILURE_MESSAGE
                return None

            if payload.get("error"):
                self.error = str(payload["error"])
                return None

            result = payload.get("result")
            if not isinstance(result, dict) or result.get("content") is None:
                self.error = NETWORK_FAILURE_MESSAGE
                return None

            entry = HistoryEntry(prompt=prompt, mode=mode, result=str(result["content"]))
            self.history.insert(0, entry)
            self.reasoning = result.get("reasoning") or None
            self.prompt = ""
            return entry
