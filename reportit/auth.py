"""
Password hashing and access tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from reportit.config import get_settings
from reportit.models.user import User
from reportit.storage.base import Storage

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class InvalidTokenError(Exception):
    """Token is malformed, expired or has no subject"""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode: Dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> int:
    """Return the user id carried by a token"""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise InvalidTokenError("Missing subject in token")
    return int(subject)


async def authenticate_user(storage: Storage, username: str, password: str) -> Optional[User]:
    user = await storage.get_user_by_username(username)
    if not user or not verify_password(password, user.password):
        return None
    return user
