# auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from waysbucks.models.user import User
from waysbucks.repositories import UserRepository
from waysbucks.routers.dependencies import get_current_user, get_user_repository
from waysbucks.schemas.result import SuccessResult, success
from waysbucks.schemas.user import LoginResponse, UserCreate, UserLogin, UserRead
from waysbucks.services.user_service import to_user_read
from waysbucks.utils.jwt_handler import create_user_token
from waysbucks.utils.password_hash import hash_password, verify_password


router = APIRouter(tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/register", response_model=SuccessResult[UserRead], status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, users: UserRepository = Depends(get_user_repository)) -> SuccessResult[UserRead]:
    if users.get_by_email(user_in.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    user = users.create_user(
        User(
            email=user_in.email,
            password=hash_password(user_in.password),
            name=user_in.name,
        )
    )
    logger.info("registered user_id=%s", user.id)
    return success(to_user_read(user))


@router.post("/login", response_model=SuccessResult[LoginResponse])
def login_user(user_in: UserLogin, users: UserRepository = Depends(get_user_repository)) -> SuccessResult[LoginResponse]:
    user = users.get_by_email(user_in.email)
    if not user or not verify_password(user_in.password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_user_token(user.id)
    user_out = to_user_read(user)
    return success(LoginResponse(**user_out.model_dump(), token=token))


@router.get("/check-auth", response_model=SuccessResult[UserRead])
def check_auth(current_user: User = Depends(get_current_user)) -> SuccessResult[UserRead]:
    return success(to_user_read(current_user))
