"""
Profile repository.

Profiles are always read together with their owning user, since every
response embeds it.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from waysbucks.models.profile import Profile
from waysbucks.repositories.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def _query(self):
        return self.db.query(Profile).options(joinedload(Profile.user))

    def find_profiles(self) -> List[Profile]:
        return self.get_all()

    def get_profile(self, profile_id: int) -> Optional[Profile]:
        return self.get_by_id(profile_id)

    def get_by_user_id(self, user_id: int) -> Optional[Profile]:
        return self._query().filter(Profile.user_id == user_id).first()

    def create_profile(self, profile: Profile) -> Profile:
        created = self.create(profile)
        # refresh() does not load relationships; the response needs the owner.
        return self.get_by_id(created.id)

    def update_profile(self, profile: Profile) -> Profile:
        updated = self.update(profile)
        return self.get_by_id(updated.id)

    def delete_profile(self, profile: Profile) -> Profile:
        return self.delete(profile)
