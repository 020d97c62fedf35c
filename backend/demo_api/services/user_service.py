"""
SDLC Demo API — User Service
=============================

What:  In-memory user directory backing /api/users.
Why:   Gives the demo a realistic read/create resource without a database.
How:   A list of User models seeded with two demo users. One instance per app.
"""

import logging
from typing import List

from demo_api.exceptions import NotFoundError, ValidationError, utc_timestamp
from demo_api.schemas.user import User, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Users are never deleted, so the next id is always len(users) + 1."""

    def __init__(self):
        now = utc_timestamp()
        self._users: List[User] = [
            User(id=1, name="John Doe", email="john@example.com", created_at=now),
            User(id=2, name="Jane Smith", email="jane@example.com", created_at=now),
        ]

    def list_users(self) -> List[User]:
        return list(self._users)

    def get_user(self, user_id: int) -> User:
        for user in self._users:
            if user.id == user_id:
                return user
        raise NotFoundError(resource="User", resource_id=user_id)

    def create_user(self, payload: UserCreate) -> User:
        if not payload.name or not payload.email:
            raise ValidationError(message="Name and email are required")

        user = User(
            id=len(self._users) + 1,
            name=payload.name,
            email=payload.email,
            created_at=utc_timestamp(),
        )
        self._users.append(user)
        logger.info("New user created: %d", user.id)
        return user
