"""
User repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from waysbucks.models.user import User
from waysbucks.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def find_users(self) -> List[User]:
        return self.get_all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.get_by_id(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._query().filter(User.email == email.strip().lower()).first()

    def create_user(self, user: User) -> User:
        return self.create(user)

    def update_user(self, user: User) -> User:
        return self.update(user)

    def delete_user(self, user: User) -> User:
        return self.delete(user)
