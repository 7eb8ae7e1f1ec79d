"""
API Service Entry Point

Allows execution via: python -m services.api

Opens the report stores, serves the API until the server stops, then closes
the stores.
"""

import logging
import sys

import uvicorn

from apps.domains import build_domains, close_domains
from services.api.app import create_app
from utils.config import settings
from utils.errors import SchemaInitFatal
from utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the API service."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    try:
        domains = build_domains()
    except SchemaInitFatal as e:
        logger.error("Could not initialize report stores: %s", str(e))
        sys.exit(1)

    app = create_app(domains)
    logger.info("Starting API (host=%s, port=%d)", settings.API_HOST, settings.API_PORT)

    try:
        uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_config=None)
    finally:
        close_domains(domains)


if __name__ == "__main__":
    main()
