"""
User Service - Registration and demo accounts
"""
import logging
from typing import Optional

from reportit.auth import get_password_hash
from reportit.exceptions import ConflictError
from reportit.models.user import Role, User
from reportit.schemas import RegisterRequest, UserCreate
from reportit.storage.base import Storage

logger = logging.getLogger(__name__)

DEMO_USERS = (
    {"username": "admin", "password": "admin123", "name": "Admin User",
     "email": "admin@report-it.com", "role": Role.ADMIN},
    {"username": "user", "password": "user123", "name": "Regular User",
     "email": "user@report-it.com", "role": Role.USER},
)


class UserService:
    """Service for user accounts"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def register(self, data: RegisterRequest, role: Role = Role.USER) -> User:
        """Create an account with a hashed password. Usernames are unique."""
        existing: Optional[User] = await self.storage.get_user_by_username(data.username)
        if existing:
            raise ConflictError("Username already exists")

        user = await self.storage.create_user(
            UserCreate(
                username=data.username,
                password=get_password_hash(data.password),
                name=data.name,
                email=data.email,
                role=role,
            )
        )
        logger.info("Registered user %s (%s)", user.username, user.role.value)
        return user

    async def seed_demo_users(self) -> None:
        """Create the admin/user demo accounts if they are missing"""
        for demo in DEMO_USERS:
            if await self.storage.get_user_by_username(demo["username"]):
                continue
            await self.register(
                RegisterRequest(
                    username=demo["username"],
                    password=demo["password"],
                    name=demo["name"],
                    email=demo["email"],
                ),
                role=demo["role"],
            )
