"""Repository for user data access."""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .base import reading, writing
from ..models.user import UserModel
from ...domain.user import User


def _to_dc(m: UserModel) -> User:
    return User(id=m.id, name=m.name)


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> List[User]:
        with reading(self.session, "listing users"):
            stmt = select(UserModel).order_by(UserModel.id)
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get(self, user_id: int) -> Optional[User]:
        with reading(self.session, f"reading user {user_id}"):
            m = self.session.get(UserModel, user_id)
        return _to_dc(m) if m else None

    def exists(self, user_id: int) -> bool:
        return self.get(user_id) is not None

    def create(self, *, name: str) -> User:
        m = UserModel(name=name)
        with writing(self.session, "creating user"):
            self.session.add(m)
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)
