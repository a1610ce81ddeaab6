"""
HTTP API adapter for the generation dispatcher.

Architectural role:
- Expose the single generation endpoint and a health probe.
- Parse the request body into a `GenerationRequest`.
- Delegate backend selection and normalization to `app.core.dispatcher`.
- Convert every failure into the uniform `{"error": ...}` envelope.

Endpoint responsibilities:
- `GET /health`: liveness probe.
- `POST /api/generate`: resolve mode, dispatch, return
  `{"result": {"content", "reasoning"}}`.

API request lifecycle (`POST /api/generate`):
1. Validate the JSON body (`prompt` string, optional `mode`).
2. Resolve the mode (permissive fallthrough to image unless `STRICT_MODE`).
3. Call exactly one backend through `dispatch`.
4. Return the normalized result envelope.

Error handling strategy:
- Malformed bodies -> HTTP 400 `{"error": "Invalid request body"}`.
- `AppError` subclasses -> their own status and message.
- Any other exception from a provider call -> HTTP 500 with the exception
  message, or the generic fallback when the message is empty.
- No retries, no partial results.

Side effects:
- Outbound provider call only.
- Request/response details are logged at debug level when `DEBUG=true`.
"""

import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.dispatcher import Backends, build_backends, dispatch
from app.core.errors import AppError, error_message
from app.core.routing_types import GenerationRequest, resolve_mode
from app.llm.provider_config import Settings, get_settings

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"


# ============================================================
# Request Schema
# ============================================================

class GenerateBody(BaseModel):
    """
    Wire shape of a generation request.

    `mode` is left unvalidated (any JSON value): everything other than
    `"text"` is routed by `resolve_mode`, not rejected by pydantic.
    """
    prompt: str
    mode: Any = None


# ============================================================
# Dependencies
# ============================================================

_backends: Backends | None = None


def get_backends(settings: Settings = Depends(get_settings)) -> Backends:
    """Return the process-wide backends, built on first use."""
    global _backends
    if _backends is None:
        _backends = build_backends(settings)
    return _backends


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================================
# Application
# ============================================================

def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_title, version="0.1.0")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request body: %s", exc.errors())
        return error_response("Invalid request body", status_code=400)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post(GENERATE_PATH)
    def generate(
        body: GenerateBody,
        settings: Settings = Depends(get_settings),
        backends: Backends = Depends(get_backends),
    ):
        """
        Generate text or an image for one prompt.

        Error handling strategy:
        - Shape, provider and strict-mode errors keep their `AppError` status.
        - Transport and unexpected provider exceptions are logged and turned
          into HTTP 500 envelopes; they never reach FastAPI's default handler.
        """
        if settings.debug:
            logger.debug("Incoming prompt=%r mode=%r", body.prompt, body.mode)

        try:
            request = GenerationRequest(
                prompt=body.prompt,
                mode=resolve_mode(body.mode, strict=settings.strict_mode),
            )
            result = dispatch(request, backends)

        except AppError as err:
            logger.warning("Generation failed: %s", err.message)
            return error_response(err.message, status_code=err.status_code)

        except Exception as err:
            logger.exception("API error")
            return error_response(error_message(err), status_code=500)

        if settings.debug:
            logger.debug("Result content=%r", result.content)

        return {"result": result.to_dict()}

    return app


app = create_app()
