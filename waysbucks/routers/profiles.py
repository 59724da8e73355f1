# profiles.py
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from waysbucks.models.profile import Profile
from waysbucks.models.user import User
from waysbucks.repositories import ProfileRepository, UserRepository
from waysbucks.routers.dependencies import (
    get_current_user,
    get_image_uploader,
    get_profile_repository,
    get_user_repository,
    require_admin,
)
from waysbucks.schemas.profile import CreateProfileRequest, ProfileResponse, UpdateProfileRequest
from waysbucks.schemas.result import SuccessResult, success
from waysbucks.services.image_upload import ImageUploader, discard_image, upload_image
from waysbucks.services.profile_service import (
    apply_profile_update,
    build_profile,
    convert_response_profile,
    first_profile_request,
)
from waysbucks.services.user_service import can_access_user_resource


router = APIRouter(tags=["profiles"])

logger = logging.getLogger(__name__)


def _profile_exists() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Profile already exists for this user")


def _get_accessible_profile(profile_id: int, current_user: User, profiles: ProfileRepository) -> Profile:
    profile = profiles.get_profile(profile_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    if not can_access_user_resource(current_user, profile.user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to access this profile")
    return profile


@router.get("/profiles", response_model=SuccessResult[list[ProfileResponse]])
def find_profiles(
    profiles: ProfileRepository = Depends(get_profile_repository),
    _admin: User = Depends(require_admin),
) -> SuccessResult[list[ProfileResponse]]:
    return success([convert_response_profile(p) for p in profiles.find_profiles()])


@router.get("/profile", response_model=SuccessResult[ProfileResponse])
def get_my_profile(
    profiles: ProfileRepository = Depends(get_profile_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[ProfileResponse]:
    profile = profiles.get_by_user_id(current_user.id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return success(convert_response_profile(profile))


@router.get("/profile/{profile_id}", response_model=SuccessResult[ProfileResponse])
def get_profile(
    profile_id: int,
    profiles: ProfileRepository = Depends(get_profile_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[ProfileResponse]:
    profile = _get_accessible_profile(profile_id, current_user, profiles)
    return success(convert_response_profile(profile))


@router.post("/profile", response_model=SuccessResult[ProfileResponse])
def create_profile(
    request: CreateProfileRequest,
    profiles: ProfileRepository = Depends(get_profile_repository),
    users: UserRepository = Depends(get_user_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[ProfileResponse]:
    if not can_access_user_resource(current_user, request.user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to create this profile")
    if not users.get_user(request.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if profiles.get_by_user_id(request.user_id):
        raise _profile_exists()

    try:
        data = profiles.create_profile(build_profile(request))
    except IntegrityError as exc:
        raise _profile_exists() from exc
    logger.info("created profile_id=%s user_id=%s", data.id, data.user_id)
    return success(convert_response_profile(data))


@router.patch("/profile", response_model=SuccessResult[ProfileResponse])
def update_profile(
    phone: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    postal_code: int = Form(0, ge=0),
    image: UploadFile | None = File(None),
    profiles: ProfileRepository = Depends(get_profile_repository),
    uploader: ImageUploader = Depends(get_image_uploader),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[ProfileResponse]:
    request = UpdateProfileRequest(phone=phone, address=address, city=city, postal_code=postal_code)

    profile = profiles.get_by_user_id(current_user.id)
    # Checked before uploading so a rejected first submission leaves no asset behind.
    first = first_profile_request(current_user.id, request) if profile is None else None

    request = request.model_copy(update={"image": upload_image(uploader, image)})
    try:
        if first is not None:
            data = profiles.create_profile(build_profile(first.model_copy(update={"image": request.image or None})))
            logger.info("created profile_id=%s on first update user_id=%s", data.id, current_user.id)
        else:
            data = profiles.update_profile(apply_profile_update(profile, request))
    except IntegrityError as exc:
        discard_image(uploader, request.image)
        raise _profile_exists() from exc
    except SQLAlchemyError:
        discard_image(uploader, request.image)
        raise
    return success(convert_response_profile(data))


@router.delete("/profile/{profile_id}", response_model=SuccessResult[ProfileResponse])
def delete_profile(
    profile_id: int,
    profiles: ProfileRepository = Depends(get_profile_repository),
    current_user: User = Depends(get_current_user),
) -> SuccessResult[ProfileResponse]:
    profile = _get_accessible_profile(profile_id, current_user, profiles)
    response = convert_response_profile(profile)
    profiles.delete_profile(profile)
    logger.info("deleted profile_id=%s by user_id=%s", profile_id, current_user.id)
    return success(response)
