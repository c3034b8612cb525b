"""
ASGI Entry Point for the algoplay API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads `.env` before the application factory runs so settings such as
`ALGOPLAY_BASE_DELAY_MS` are visible to the session store.

Usage
-----
Run via the module entry point:
    $ python -m algoplay.api.server

Or via uvicorn directly:
    $ uvicorn algoplay.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from algoplay.api.app import create_app

load_dotenv(dotenv_path=Path(".env"))

app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    uvicorn.run(
        "algoplay.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
