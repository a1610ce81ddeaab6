"""
Server entrypoint for the generation dispatcher.

Architectural role:
- Configures logging from settings.
- Serves `app.api.http_api:app` with uvicorn.

Usage:
    python -m app.api.main
    HOST=0.0.0.0 PORT=8080 python -m app.api.main
"""

import uvicorn

from app.core.log_setup import configure_logging
from app.llm.provider_config import get_settings


def main():
    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "app.api.http_api:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
