import logging

from passlib.exc import UnknownHashError
from sqlalchemy.exc import IntegrityError

from app.core import security
from app.core.config import get_settings
from app.core.db import session_scope
from app.models import User, UserRole

logger = logging.getLogger(__name__)


def _password_still_valid(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return security.verify_password(password, password_hash)
    except (ValueError, UnknownHashError):
        return False


def ensure_default_admin() -> None:
    """Make sure the configured admin account exists with the ADMIN role and current password."""

    settings = get_settings()
    username = settings.DEFAULT_ADMIN_USERNAME.strip()
    password = settings.DEFAULT_ADMIN_PASSWORD
    if not username or not password:
        logger.info("No default admin configured; skipping bootstrap")
        return

    try:
        with session_scope() as db:
            admin = db.query(User).filter(User.username == username).first()
            if admin is None:
                db.add(
                    User(
                        username=username,
                        password_hash=security.create_password_hash(password),
                        role=UserRole.ADMIN,
                    )
                )
                logger.info("Default admin '%s' created", username)
                return

            repaired: list[str] = []
            if admin.role != UserRole.ADMIN:
                admin.role = UserRole.ADMIN
                repaired.append("role")
            if not _password_still_valid(password, admin.password_hash):
                admin.password_hash = security.create_password_hash(password)
                repaired.append("password")
            if repaired:
                logger.info("Default admin '%s' repaired: %s", username, ", ".join(repaired))
    except IntegrityError:
        # another worker created the same username first
        logger.warning("Default admin '%s' already created by a concurrent startup", username)
