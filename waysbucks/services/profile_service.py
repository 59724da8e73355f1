# profile_service.py
from fastapi import HTTPException, status
from pydantic import ValidationError

from waysbucks.models.profile import Profile
from waysbucks.schemas.profile import CreateProfileRequest, ProfileResponse, UpdateProfileRequest


def build_profile(request: CreateProfileRequest) -> Profile:
    return Profile(
        phone=request.phone,
        address=request.address,
        city=request.city,
        postal_code=request.postal_code,
        image=request.image,
        user_id=request.user_id,
    )


def apply_profile_update(profile: Profile, update: UpdateProfileRequest) -> Profile:
    """Overwrite only the fields that carry a value.

    Blank strings and a zero postal code mean "unchanged"; the image is
    replaced only when a new one was uploaded.
    """
    if update.phone.strip():
        profile.phone = update.phone.strip()
    if update.address.strip():
        profile.address = update.address.strip()
    if update.city.strip():
        profile.city = update.city.strip()
    if update.postal_code != 0:
        profile.postal_code = update.postal_code
    if update.image:
        profile.image = update.image
    return profile


def first_profile_request(user_id: int, update: UpdateProfileRequest) -> CreateProfileRequest:
    """Turn the first update of a user without a profile into a create request.

    The submitted fields must satisfy the same rules as an explicit create.
    """
    try:
        return CreateProfileRequest(
            phone=update.phone,
            address=update.address,
            city=update.city,
            postal_code=update.postal_code,
            image=update.image or None,
            user_id=user_id,
        )
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing or invalid profile fields: {', '.join(fields)}",
        ) from exc


def convert_response_profile(profile: Profile) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)
