"""Provider/runtime configuration for the generation backends.

Architectural role:
    Centralizes provider endpoints, model identifiers, credentials and timeouts
    for `app.llm`, `app.image`, the HTTP dispatcher and the interaction client.

Model call flow integration:
    - `app.llm.client` consumes the gateway URL, API key and default headers.
    - `app.image.client` consumes the space id, endpoint name and HF token.
    - `app.image.service` consumes the fixed `IMAGE_PARAMETERS`.

Lifecycle:
    Values are resolved once from the process environment (after `.env` is
    loaded) into a frozen `Settings` instance. There is no reload path; tests
    build their own instances with `load_settings(environ)`.

Failure behavior:
    Missing credentials are represented as `None`; the provider rejects the
    call and the dispatcher reports it as an upstream error. Malformed numeric
    values fall back to defaults instead of aborting startup.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


# OpenAI-compatible gateway defaults.
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
TEXT_MODEL = "deepseek/deepseek-r1-zero:free"
APP_TITLE = "AI Content Generator"
SITE_URL = "http://localhost:3000"

# Hosted diffusion space defaults.
IMAGE_SPACE = "black-forest-labs/FLUX.1-dev"
IMAGE_ENDPOINT = "/infer"

TEXT_TIMEOUT_SECONDS = 120.0
IMAGE_TIMEOUT_SECONDS = 300.0

DISPATCHER_URL = "http://127.0.0.1:8000/api/generate"


@dataclass(frozen=True)
class ImageParameters:
    """Fixed inference parameters sent with every image request.

    Not derived from the incoming request.
    """

    seed: int = 0
    randomize_seed: bool = True
    width: int = 512
    height: int = 512
    guidance_scale: float = 7.5
    num_inference_steps: int = 50


IMAGE_PARAMETERS = ImageParameters()


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration."""

    openrouter_api_key: str | None = None
    hf_token: str | None = None
    site_url: str = SITE_URL
    openrouter_base_url: str = OPENROUTER_BASE_URL
    text_model: str = TEXT_MODEL
    app_title: str = APP_TITLE
    image_space: str = IMAGE_SPACE
    image_endpoint: str = IMAGE_ENDPOINT
    text_timeout_seconds: float = TEXT_TIMEOUT_SECONDS
    image_timeout_seconds: float = IMAGE_TIMEOUT_SECONDS
    strict_mode: bool = False
    log_level: str = "INFO"
    debug: bool = False
    dispatcher_url: str = DISPATCHER_URL
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def default_headers(self) -> dict:
        """Attribution headers the gateway expects on every completion call."""
        return {
            "HTTP-Referer": self.site_url,
            "X-Title": self.app_title,
        }


def _env_str(environ, name, default=None):
    value = (environ.get(name) or "").strip()
    return value or default


def _env_float(environ, name, default):
    raw = _env_str(environ, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(environ, name, default):
    raw = _env_str(environ, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(environ, name):
    return (_env_str(environ, name, "") or "").lower() in ("1", "true", "yes")


def load_settings(environ=None) -> Settings:
    """Build `Settings` from an environment mapping.

    Args:
        environ: Mapping to read from. Defaults to `os.environ`.

    Returns:
        Frozen `Settings` instance.

    Edge cases:
        - Blank values are treated as unset.
        - Non-numeric or non-positive timeouts fall back to defaults.
    """
    if environ is None:
        environ = os.environ

    return Settings(
        openrouter_api_key=_env_str(environ, "OPENROUTER_API_KEY"),
        hf_token=_env_str(environ, "HF_TOKEN"),
        site_url=_env_str(environ, "SITE_URL", SITE_URL),
        openrouter_base_url=_env_str(environ, "OPENROUTER_BASE_URL", OPENROUTER_BASE_URL),
        text_model=_env_str(environ, "TEXT_MODEL", TEXT_MODEL),
        app_title=_env_str(environ, "APP_TITLE", APP_TITLE),
        image_space=_env_str(environ, "IMAGE_SPACE", IMAGE_SPACE),
        image_endpoint=_env_str(environ, "IMAGE_ENDPOINT", IMAGE_ENDPOINT),
        text_timeout_seconds=_env_float(environ, "TEXT_TIMEOUT_SECONDS", TEXT_TIMEOUT_SECONDS),
        image_timeout_seconds=_env_float(environ, "IMAGE_TIMEOUT_SECONDS", IMAGE_TIMEOUT_SECONDS),
        strict_mode=_env_flag(environ, "STRICT_MODE"),
        log_level=_env_str(environ, "LOG_LEVEL", "INFO").upper(),
        debug=_env_flag(environ, "DEBUG"),
        dispatcher_url=_env_str(environ, "DISPATCHER_URL", DISPATCHER_URL),
        host=_env_str(environ, "HOST", "127.0.0.1"),
        port=_env_int(environ, "PORT", 8000),
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, built on first use."""
    return load_settings()
