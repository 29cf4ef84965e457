"""User service encapsulating business rules."""
from __future__ import annotations

from typing import List

from loguru import logger
from sqlalchemy.orm import Session

from ..db.repositories.user_repo import UserRepository
from ..domain.user import User
from ..exceptions import InvalidInput, UserNotFound


class UserService:
    def __init__(self, session: Session) -> None:
        self.repo = UserRepository(session)

    def list_users(self) -> List[User]:
        return self.repo.list()

    def create_user(self, name: str) -> User:
        name = (name or "").strip()
        if not name:
            raise InvalidInput("name must not be empty")
        user = self.repo.create(name=name)
        logger.info("user {} created", user.id)
        return user

    def get_user(self, user_id: int) -> User:
        user = self.repo.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user
