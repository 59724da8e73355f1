# users.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from waysbucks.models.user import User
from waysbucks.repositories import UserRepository
from waysbucks.routers.dependencies import get_current_user, get_user_repository, require_admin
from waysbucks.schemas.result import SuccessResult, success
from waysbucks.schemas.user import UserRead, UserUpdate
from waysbucks.services.user_service import can_access_user_resource, to_user_read
from waysbucks.utils.password_hash import hash_password


router = APIRouter(tags=["users"])

logger = logging.getLogger(__name__)


def _get_accessible_user(user_id: int, current_user: User, users: UserRepository) -> User:
    if not can_access_user_resource(current_user, user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to access this user")
    user = users.get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/users", response_model=SuccessResult[list[UserRead]])
def find_users(
    users: UserRepository = Depends(get_user_repository),
    _admin: User = Depends(require_admin),
) -> SuccessResult[list[UserRead]]:
    return success([to_user_read(u) for u in users.find_users()])


@router.get("/users/me", response_model=SuccessResult[UserRead])
def read_current_user(current_user: User = Depends(get_current_user)) -> SuccessResult[UserRead]:
    return success(to_user_read(current_user))


@router.patch("/users/me", response_model=SuccessResult[UserRead])
def update_current_user(
    update: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[UserRead]:
    update_data = update.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data and update_data["name"].strip():
        current_user.name = update_data["name"].strip()
    if "password" in update_data:
        current_user.password = hash_password(update_data["password"])
    user = users.update_user(current_user)
    return success(to_user_read(user))


@router.get("/user/{user_id}", response_model=SuccessResult[UserRead])
def get_user(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[UserRead]:
    return success(to_user_read(_get_accessible_user(user_id, current_user, users)))


@router.delete("/user/{user_id}", response_model=SuccessResult[UserRead])
def delete_user(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[UserRead]:
    user = _get_accessible_user(user_id, current_user, users)
    response = to_user_read(user)
    users.delete_user(user)
    logger.info("deleted user_id=%s by user_id=%s", user_id, current_user.id)
    return success(response)
