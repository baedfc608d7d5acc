"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn healthymeal.main:app --reload

    # Installed console script
    healthymeal
"""

import uvicorn

from healthymeal.core.config import get_settings
from healthymeal.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "healthymeal.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
