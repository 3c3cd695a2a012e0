"""
ASGI Entry Point for the dicetrail API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory runs,
so settings read at import time see them.

Usage
-----
Run via the module entry point:
    $ python -m dicetrail.api.server

Or via uvicorn directly:
    $ uvicorn dicetrail.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from dicetrail.api.app import create_app
from dicetrail.core.settings import load_settings

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #

load_dotenv(dotenv_path=Path(".env"))
load_settings.cache_clear()

app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    current = load_settings()
    uvicorn.run(
        "dicetrail.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=current.is_dev,
        log_level=current.log_level.lower(),
    )


if __name__ == "__main__":
    main()
