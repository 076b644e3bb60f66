"""
FastAPI dependencies for storage, services and the current user
"""
from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from reportit.auth import InvalidTokenError, decode_token
from reportit.config import get_settings
from reportit.database import get_session_factory
from reportit.models.user import User
from reportit.services.actor import Actor
from reportit.services.badge_service import BadgeService
from reportit.services.report_service import ReportService
from reportit.storage import MemStorage, SqlStorage, Storage

oauth_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")

_memory_storage: Optional[MemStorage] = None


def wire_badges(storage: Storage) -> Storage:
    """Feed the storage's activity signals into a badge service"""
    storage.add_activity_listener(BadgeService(storage).record_activity)
    return storage


def get_memory_storage() -> MemStorage:
    """Process-wide in-memory store for the "memory" backend"""
    global _memory_storage
    if _memory_storage is None:
        _memory_storage = MemStorage()
        wire_badges(_memory_storage)
    return _memory_storage


async def get_storage() -> AsyncGenerator[Storage, None]:
    """Storage for the configured backend, one SQL session per request"""
    if get_settings().storage_backend == "memory":
        yield get_memory_storage()
        return

    async with get_session_factory()() as session:
        yield wire_badges(SqlStorage(session))


async def get_current_user(
    token: str = Depends(oauth_scheme),
    storage: Storage = Depends(get_storage),
) -> User:
    try:
        user_id = decode_token(token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    user = await storage.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_actor(current_user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(current_user)


def get_report_service(storage: Storage = Depends(get_storage)) -> ReportService:
    return ReportService(storage)
