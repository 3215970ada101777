"""Single mapping from service error kinds to HTTP responses."""

import logging
from contextlib import contextmanager
from typing import Generator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from app.services import exceptions as service_exceptions
from app.services.exceptions import GENERIC_ERROR_MESSAGE

logger = logging.getLogger(__name__)


@contextmanager
def storefront_errors(action: str) -> Generator[None, None, None]:
    """Let service errors through unchanged and turn anything else into ``InfrastructureError``."""

    try:
        yield
    except service_exceptions.ServiceError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while trying to %s", action)
        raise service_exceptions.InfrastructureError(GENERIC_ERROR_MESSAGE) from exc


def register_exception_handlers(app: FastAPI) -> None:
    validation_logger = logging.getLogger("app.validation")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        validation_logger.warning(
            "Validation error on %s %s detail=%s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.errors()},
        )

    @app.exception_handler(service_exceptions.NotFoundError)
    async def not_found_handler(request: Request, exc: service_exceptions.NotFoundError):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(service_exceptions.ConflictError)
    async def conflict_handler(request: Request, exc: service_exceptions.ConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(service_exceptions.AuthenticationError)
    async def authentication_handler(request: Request, exc: service_exceptions.AuthenticationError):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)})

    @app.exception_handler(service_exceptions.InfrastructureError)
    async def infrastructure_handler(request: Request, exc: service_exceptions.InfrastructureError):
        logger.error("Infrastructure failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_ERROR_MESSAGE},
        )
