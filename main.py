"""
main.py
-------
Entry point for the Portfolio API.

Responsibilities:
    - Load configuration and open the database connection pool.
    - Build the repository, service and FastAPI application.
    - Serve HTTP with uvicorn until interrupted, then close the pool.

Configuration or connection failures are fatal: the error is logged
and the process exits with status 1.
"""

import sys

import uvicorn

from app import create_app
from config import load_settings
from db.connection import PostgresDatabase
from repositories.portfolio_repo import PortfolioRepository
from services.portfolio_service import PortfolioService
from utils.errors import ConfigError, DatabaseConnectionError
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Start the API server."""
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.critical(f"Failed to load configuration: {e}")
        sys.exit(1)

    try:
        database = PostgresDatabase(settings)
    except DatabaseConnectionError as e:
        logger.critical(f"Failed initial database setup: {e}")
        sys.exit(1)

    app = create_app(PortfolioService(PortfolioRepository(database)))

    logger.info(f"Starting HTTP server on {settings.http_host}:{settings.http_port}...")
    try:
        uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_config=None)
    finally:
        database.close()


if __name__ == "__main__":
    main()
