"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the doubt-solver interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the API and the NiceGUI pages on one port."""
    import uvicorn
    from nicegui import ui

    from edugame.api.app import create_app
    from edugame.ui.chat_page import register_pages

    app = create_app()
    register_pages(app.state.sessions)

    ui.run_with(
        app,
        title="EduGame",
        favicon="🎓",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "edugame-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting EduGame on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
