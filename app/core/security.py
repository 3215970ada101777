from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from .config import get_settings


@lru_cache
def get_password_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.PASSWORD_HASHING_ROUNDS,
    )


def create_password_hash(password: str) -> str:
    return get_password_context().hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return get_password_context().verify(password, hashed_password)


def create_access_token(
    *,
    subject: str | int,
    role: str,
) -> str:
    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "role": role,
        "type": "access",
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm="HS256")


def decode_access_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=["HS256"])
