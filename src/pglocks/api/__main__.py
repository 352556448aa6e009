"""
Main entry point for the pglocks API when run with python -m

    python -m pglocks.api
"""

import uvicorn

from pglocks.api import create_app
from pglocks.core.config import Settings

if __name__ == "__main__":
    settings = Settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.get("api.host", "127.0.0.1"),
        port=settings.get("api.port", 8000),
        log_level="info",
    )
