from __future__ import annotations

import pytest
from fastapi import HTTPException

from waysbucks.models.profile import Profile
from waysbucks.schemas.profile import UpdateProfileRequest
from waysbucks.services.profile_service import apply_profile_update, first_profile_request


def _stored() -> Profile:
    return Profile(
        phone="0811",
        address="Jl. Lama 1",
        city="Bogor",
        postal_code=16111,
        image="https://res.cloudinary.com/demo/old.png",
        user_id=1,
    )


def test_empty_update_changes_nothing() -> None:
    profile = apply_profile_update(_stored(), UpdateProfileRequest())
    assert (profile.phone, profile.address, profile.city, profile.postal_code) == ("0811", "Jl. Lama 1", "Bogor", 16111)
    assert profile.image == "https://res.cloudinary.com/demo/old.png"


def test_blank_strings_are_ignored_and_values_trimmed() -> None:
    update = UpdateProfileRequest(phone="  ", address="  Jl. Baru 2 ", city="", postal_code=0)
    profile = apply_profile_update(_stored(), update)
    assert profile.phone == "0811"
    assert profile.address == "Jl. Baru 2"
    assert profile.city == "Bogor"
    assert profile.postal_code == 16111


def test_new_image_and_postal_code_replace_stored_values() -> None:
    update = UpdateProfileRequest(postal_code=16912, image="https://res.cloudinary.com/demo/new.png")
    profile = apply_profile_update(_stored(), update)
    assert profile.postal_code == 16912
    assert profile.image == "https://res.cloudinary.com/demo/new.png"


def test_first_profile_request_accepts_complete_submission() -> None:
    update = UpdateProfileRequest(phone=" 0811 ", address="Jl. Margonda 9", city="Depok", postal_code=16424)
    request = first_profile_request(7, update)
    assert request.user_id == 7
    assert request.phone == "0811"
    assert request.postal_code == 16424
    assert request.image is None


def test_first_profile_request_names_missing_fields() -> None:
    with pytest.raises(HTTPException) as exc:
        first_profile_request(7, UpdateProfileRequest(city="Depok", phone="   "))
    assert exc.value.status_code == 400
    assert exc.value.detail == "Missing or invalid profile fields: address, phone, postal_code"
