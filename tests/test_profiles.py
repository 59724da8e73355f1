from __future__ import annotations

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _profile_payload(user_id: int, **overrides) -> dict:
    payload = {
        "phone": "08123456789",
        "address": "Jl. Sudirman 1",
        "city": "Jakarta",
        "postal_code": 10110,
        "user_id": user_id,
    }
    payload.update(overrides)
    return payload


def test_create_and_get_profile(client, login) -> None:
    user = login("buyer@example.com", name="Buyer")
    r = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["code"] == "Success"
    profile = body["data"]
    assert profile["city"] == "Jakarta"
    assert profile["postal_code"] == 10110
    assert profile["image"] is None
    assert profile["user_id"] == user["id"]
    assert profile["user"] == {"id": user["id"], "name": "Buyer", "email": "buyer@example.com"}

    by_id = client.get(f"/api/v1/profile/{profile['id']}", headers=user["headers"])
    assert by_id.status_code == 200
    assert by_id.json()["data"] == profile

    mine = client.get("/api/v1/profile", headers=user["headers"])
    assert mine.status_code == 200
    assert mine.json()["data"]["id"] == profile["id"]


def test_create_profile_validation(client, login) -> None:
    user = login("validate@example.com")

    missing_city = _profile_payload(user["id"])
    del missing_city["city"]
    r = client.post("/api/v1/profile", json=missing_city, headers=user["headers"])
    assert r.status_code == 400
    assert r.json()["code"] == 400
    assert "city" in r.json()["message"]

    blank = client.post("/api/v1/profile", json=_profile_payload(user["id"], phone="   "), headers=user["headers"])
    assert blank.status_code == 400

    bad_postal = client.post("/api/v1/profile", json=_profile_payload(user["id"], postal_code=0), headers=user["headers"])
    assert bad_postal.status_code == 400

    not_json = client.post(
        "/api/v1/profile",
        content=b"{not json",
        headers={**user["headers"], "Content-Type": "application/json"},
    )
    assert not_json.status_code == 400
    assert not_json.json()["code"] == 400


def test_one_profile_per_user(client, login) -> None:
    user = login("single@example.com")
    first = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"])
    assert first.status_code == 200

    second = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"])
    assert second.status_code == 400
    assert second.json() == {"code": 400, "message": "Profile already exists for this user"}


def test_create_profile_for_other_user_requires_admin(client, login) -> None:
    owner = login("owner@example.com")
    other = login("other@example.com")
    admin = login("admin@example.com")

    forbidden = client.post("/api/v1/profile", json=_profile_payload(owner["id"]), headers=other["headers"])
    assert forbidden.status_code == 403

    by_admin = client.post("/api/v1/profile", json=_profile_payload(owner["id"]), headers=admin["headers"])
    assert by_admin.status_code == 200
    assert by_admin.json()["data"]["user_id"] == owner["id"]

    unknown = client.post("/api/v1/profile", json=_profile_payload(9999), headers=admin["headers"])
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "User not found"


def test_update_profile_overwrites_only_submitted_fields(client, login, uploader) -> None:
    user = login("patch@example.com")
    created = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"]).json()["data"]

    r = client.patch(
        "/api/v1/profile",
        data={"address": "Jl. Thamrin 5", "postal_code": "", "city": ""},
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
        headers=user["headers"],
    )
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["id"] == created["id"]
    assert updated["address"] == "Jl. Thamrin 5"
    assert updated["city"] == "Jakarta"
    assert updated["phone"] == "08123456789"
    assert updated["postal_code"] == 10110
    assert updated["image"].endswith("/WaysBucks/avatar.png")
    assert uploader.uploads == ["avatar.png"]

    # No file: the stored image stays.
    r = client.patch("/api/v1/profile", data={"postal_code": "40111"}, headers=user["headers"])
    assert r.status_code == 200
    again = r.json()["data"]
    assert again["postal_code"] == 40111
    assert again["image"] == updated["image"]
    assert again["address"] == "Jl. Thamrin 5"
    assert uploader.uploads == ["avatar.png"]


def test_first_update_creates_profile(client, login) -> None:
    user = login("fresh@example.com")
    assert client.get("/api/v1/profile", headers=user["headers"]).status_code == 404

    r = client.patch(
        "/api/v1/profile",
        data={"phone": "0811", "address": "Jl. Braga 2", "city": "Bandung", "postal_code": "40111"},
        headers=user["headers"],
    )
    assert r.status_code == 200
    profile = r.json()["data"]
    assert profile["user_id"] == user["id"]
    assert profile["city"] == "Bandung"
    assert profile["image"] is None

    assert client.get("/api/v1/profile", headers=user["headers"]).json()["data"]["id"] == profile["id"]


def test_update_profile_rejects_bad_input(client, login, uploader) -> None:
    user = login("badinput@example.com")
    fields = {"phone": "0811", "address": "Jl. Braga 2", "city": "Bandung", "postal_code": "40111"}

    wrong_type = client.patch(
        "/api/v1/profile",
        data=fields,
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=user["headers"],
    )
    assert wrong_type.status_code == 400
    assert wrong_type.json()["message"] == "Unsupported image type: text/plain"

    bad_postal = client.patch("/api/v1/profile", data={"postal_code": "abc"}, headers=user["headers"])
    assert bad_postal.status_code == 400

    uploader.fail = True
    failed = client.patch(
        "/api/v1/profile",
        data=fields,
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
        headers=user["headers"],
    )
    assert failed.status_code == 502
    assert failed.json() == {"code": 502, "message": "Image upload failed"}
    assert client.get("/api/v1/profile", headers=user["headers"]).status_code == 404

    assert client.patch("/api/v1/profile", data={"city": "Bandung"}).status_code == 401


def test_first_update_must_carry_required_fields(client, login, uploader) -> None:
    user = login("incomplete@example.com")

    empty = client.patch("/api/v1/profile", data={}, headers=user["headers"])
    assert empty.status_code == 400
    assert empty.json() == {
        "code": 400,
        "message": "Missing or invalid profile fields: address, city, phone, postal_code",
    }
    assert client.get("/api/v1/profile", headers=user["headers"]).status_code == 404

    # Rejected before the image goes out.
    partial = client.patch(
        "/api/v1/profile",
        data={"city": "Bandung", "phone": "0811"},
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
        headers=user["headers"],
    )
    assert partial.status_code == 400
    assert partial.json()["message"] == "Missing or invalid profile fields: address, postal_code"
    assert uploader.uploads == []
    assert client.get("/api/v1/profile", headers=user["headers"]).status_code == 404


def test_concurrent_create_reports_existing_profile(client, login, uploader, monkeypatch) -> None:
    from waysbucks.repositories import ProfileRepository

    user = login("racer@example.com")
    created = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"])
    assert created.status_code == 200

    # Another request inserted the row between the existence check and the insert.
    monkeypatch.setattr(ProfileRepository, "get_by_user_id", lambda self, user_id: None)

    again = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"])
    assert again.status_code == 400
    assert again.json() == {"code": 400, "message": "Profile already exists for this user"}

    patched = client.patch(
        "/api/v1/profile",
        data={"phone": "0811", "address": "Jl. Braga 2", "city": "Bandung", "postal_code": "40111"},
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
        headers=user["headers"],
    )
    assert patched.status_code == 400
    assert patched.json()["message"] == "Profile already exists for this user"
    assert uploader.uploads == ["avatar.png"]
    assert uploader.discarded == ["https://res.cloudinary.com/demo/image/upload/WaysBucks/avatar.png"]

    stored = client.get(f"/api/v1/profile/{created.json()['data']['id']}", headers=user["headers"])
    assert stored.status_code == 200
    assert stored.json()["data"]["city"] == "Jakarta"
    assert stored.json()["data"]["image"] is None


def test_find_profiles_is_admin_only(client, login) -> None:
    a = login("a@example.com")
    b = login("b@example.com")
    admin = login("admin@example.com")
    client.post("/api/v1/profile", json=_profile_payload(a["id"]), headers=a["headers"])
    client.post("/api/v1/profile", json=_profile_payload(b["id"], city="Surabaya"), headers=b["headers"])

    denied = client.get("/api/v1/profiles", headers=a["headers"])
    assert denied.status_code == 403
    assert denied.json() == {"code": 403, "message": "Admin access required"}

    r = client.get("/api/v1/profiles", headers=admin["headers"])
    assert r.status_code == 200
    profiles = r.json()["data"]
    assert [p["user"]["email"] for p in profiles] == ["a@example.com", "b@example.com"]


def test_get_profile_of_other_user(client, login) -> None:
    owner = login("private@example.com")
    stranger = login("stranger@example.com")
    profile = client.post("/api/v1/profile", json=_profile_payload(owner["id"]), headers=owner["headers"]).json()["data"]

    assert client.get(f"/api/v1/profile/{profile['id']}", headers=stranger["headers"]).status_code == 403
    missing = client.get("/api/v1/profile/4242", headers=owner["headers"])
    assert missing.status_code == 404
    assert missing.json() == {"code": 404, "message": "Profile not found"}


def test_delete_profile_returns_deleted_data(client, login) -> None:
    user = login("delete@example.com")
    stranger = login("nosy@example.com")
    profile = client.post("/api/v1/profile", json=_profile_payload(user["id"]), headers=user["headers"]).json()["data"]

    assert client.delete(f"/api/v1/profile/{profile['id']}", headers=stranger["headers"]).status_code == 403

    r = client.delete(f"/api/v1/profile/{profile['id']}", headers=user["headers"])
    assert r.status_code == 200
    assert r.json()["data"] == profile

    assert client.get(f"/api/v1/profile/{profile['id']}", headers=user["headers"]).status_code == 404
    assert client.delete(f"/api/v1/profile/{profile['id']}", headers=user["headers"]).status_code == 404
