import logging

from sqlalchemy.orm import Session

from app.core import security
from app.models import User, UserRole

from . import exceptions
from .exceptions import translate_db_errors

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, *, username: str, password: str, role: UserRole = UserRole.USER) -> User:
        with translate_db_errors(self.db, "register user"):
            existing = self.db.query(User.id).filter(User.username == username).first()
            if existing:
                raise exceptions.ConflictError("Username already exists")
            user = User(
                username=username,
                password_hash=security.create_password_hash(password),
                role=role,
            )
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        logger.info("User '%s' registered with id %s", username, user.id)
        return user

    def authenticate(self, *, username: str, password: str) -> User:
        with translate_db_errors(self.db, "authenticate user"):
            user = self.db.query(User).filter(User.username == username).first()
        if not user or not security.verify_password(password, user.password_hash):
            logger.info("Failed login for '%s'", username)
            raise exceptions.AuthenticationError("Incorrect username or password")
        return user

    @staticmethod
    def issue_token(user: User) -> str:
        return security.create_access_token(subject=user.id, role=user.role.value)
