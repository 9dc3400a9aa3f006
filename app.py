"""
app.py
------
FastAPI application factory.

Wires the service into the app state, registers the public routes,
logs every request and translates application errors to HTTP statuses:
    InvalidArgumentError          -> 400
    NotFoundError                 -> 404
    StorageError / DB connection  -> 500 (details only in the server log)
"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from handlers import public_handler
from services.portfolio_service import PortfolioService
from utils.errors import (
    DatabaseConnectionError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
)
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(service: PortfolioService) -> FastAPI:
    """
    Build the API around an already constructed service.

    Args:
        service: The PortfolioService every route delegates to.

    Returns:
        A ready-to-serve FastAPI application.
    """
    app = FastAPI(title="Portfolio API")
    app.state.service = service
    app.include_router(public_handler.router)

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        client = request.client.host if request.client else "-"
        logger.info(f"Received request: {request.method} {request.url.path} from {client}")
        return await call_next(request)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info(f"{request.method} {request.url.path}: {exc}")
        return PlainTextResponse(str(exc), status_code=404)

    @app.exception_handler(StorageError)
    @app.exception_handler(DatabaseConnectionError)
    async def server_error_handler(request: Request, exc: Exception):
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
        return PlainTextResponse("Internal server error", status_code=500)

    return app
