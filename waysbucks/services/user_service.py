# user_service.py
from waysbucks.config import is_admin_email
from waysbucks.models.user import User
from waysbucks.schemas.user import UserRead


def to_user_read(user: User) -> UserRead:
    user_out = UserRead.model_validate(user)
    return user_out.model_copy(update={"is_admin": is_admin_email(user.email)})


def can_access_user_resource(current_user: User, owner_id: int | None) -> bool:
    return current_user.id == owner_id or is_admin_email(current_user.email)
