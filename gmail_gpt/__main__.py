"""Entry point for the Gmail GPT server."""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

REQUIRED_SETTINGS = [
    ("GOOGLE_CLIENT_ID", "CLIENT_ID"),
    ("GOOGLE_CLIENT_SECRET", "CLIENT_SECRET"),
    ("GOOGLE_REDIRECT_URI", "REDIRECT_URI"),
]


def configure_logging() -> None:
    """Configure logging to stderr.

    Respects LOG_LEVEL env var (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = logging.getLevelNamesMapping().get(log_level_str, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # Reduce noise from Google libraries
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)


def validate_environment() -> bool:
    """Check the OAuth settings.

    Missing settings are logged as a warning and do not stop the server:
    health checks keep working and the OAuth routes report a configuration
    error until the settings are provided.

    Returns:
        True if every required setting is present, False otherwise.
    """
    logger = logging.getLogger(__name__)

    missing = [
        names[0] for names in REQUIRED_SETTINGS if not any(os.getenv(n) for n in names)
    ]

    if missing:
        logger.warning(
            "Missing environment variables: %s. Gmail cannot be connected "
            "until they are set.",
            ", ".join(missing),
        )
        return False

    return True


def main() -> None:
    """Main entry point.

    Loads environment, validates configuration, and serves the HTTP routes
    and the MCP transport with uvicorn.
    """
    # Load .env file if present
    load_dotenv()

    # Configure logging first
    configure_logging()
    logger = logging.getLogger(__name__)

    validate_environment()

    # Import server after the environment is loaded
    import uvicorn

    from gmail_gpt.server import mcp

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    transport = os.getenv("TRANSPORT", "sse").lower()

    match transport:
        case "streamable-http":
            logger.info("Starting Gmail GPT server (streamable-http) on %s:%d", host, port)
            app = mcp.streamable_http_app()
        case _:
            logger.info("Starting Gmail GPT server (sse) on %s:%d", host, port)
            app = mcp.sse_app()

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
