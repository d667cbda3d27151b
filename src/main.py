"""Main application entry point.

Runs the NiceGUI client against the retrieval backend.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    One gateway is shared by every browser session and closed on shutdown.
    """
    from nicegui import app, ui

    from src.client.config import get_client_config
    from src.client.gateway import RequestGateway
    from src.ui.chat_page import register_pages

    config = get_client_config()
    gateway = RequestGateway(config)
    app.on_shutdown(gateway.aclose)
    register_pages(gateway, config)

    logger.info(f"Using backend at {config.api_url}")
    ui.run(
        title="RAG Assistant",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "rag-client-secret"),
    )


if __name__ == "__main__":
    main()
