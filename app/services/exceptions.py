import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Oops... our bad."


class ServiceError(Exception):
    """Base exception for service-level errors."""


class AuthenticationError(ServiceError):
    pass


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class InfrastructureError(ServiceError):
    """Failure not attributable to client input: connection loss, SQL error, timeout."""


@contextmanager
def translate_db_errors(db: Session, action: str) -> Generator[None, None, None]:
    """Roll back and re-raise SQLAlchemy failures as service errors.

    Constraint violations become ``ConflictError``; every other database error,
    including pool checkout timeouts, becomes ``InfrastructureError``.
    """

    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity violation during %s: %s", action, exc.orig)
        raise ConflictError(f"Conflict while trying to {action}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database failure during %s", action)
        raise InfrastructureError(f"Database failure during {action}") from exc
