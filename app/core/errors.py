"""Application error types for the dispatcher.

Every error raised inside the generation path is converted into the uniform
`{"error": <message>}` envelope at the HTTP boundary (`app.api.http_api`).
"""

INVALID_RESPONSE_MESSAGE = "Invalid response from API"
GENERIC_FAILURE_MESSAGE = "Failed to process the request"


class AppError(Exception):
    """Base application error carrying an HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class UpstreamShapeError(AppError):
    """Provider answered, but without the field the dispatcher reads."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(INVALID_RESPONSE_MESSAGE, status_code=500)


class UpstreamCallError(AppError):
    """Provider reported a failure of its own (not a transport error)."""

    def __init__(self, provider: str, message: str | None = None):
        self.provider = provider
        super().__init__(message or GENERIC_FAILURE_MESSAGE, status_code=500)


class InvalidModeError(AppError):
    """Mode value outside the text/image pair while strict mode is enabled."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"Unsupported mode: {mode}", status_code=400)


def error_message(exc: BaseException) -> str:
    """Return the message to report for `exc`, or the generic fallback."""
    if isinstance(exc, AppError):
        return exc.message or GENERIC_FAILURE_MESSAGE
    return str(exc).strip() or GENERIC_FAILURE_MESSAGE
