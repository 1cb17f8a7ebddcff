def test_profile_requires_login(client):
    assert client.patch("/api/profile", json={"bio": "hi"}).status_code == 401


def test_update_profile(auth_client):
    response = auth_client.patch(
        "/api/profile",
        json={"username": "renamed", "bio": "Collector of old radios", "profileImageUrl": "https://img.example.com/me.png"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "renamed"
    assert body["bio"] == "Collector of old radios"
    assert body["profileImageUrl"] == "https://img.example.com/me.png"
    assert auth_client.get("/api/auth/user").json()["username"] == "renamed"


def test_partial_update_keeps_other_fields(auth_client, test_user):
    auth_client.patch("/api/profile", json={"bio": "first"})

    response = auth_client.patch("/api/profile", json={"profileImageUrl": "https://img.example.com/a.png"})

    assert response.json()["bio"] == "first"
    assert response.json()["username"] == test_user.username


def test_username_must_be_unique(auth_client, other_user):
    response = auth_client.patch("/api/profile", json={"username": other_user.username})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "USERNAME_TAKEN"


def test_keeping_own_username_is_allowed(auth_client, test_user):
    response = auth_client.patch("/api/profile", json={"username": test_user.username})
    assert response.status_code == 200


def test_unknown_fields_rejected(auth_client):
    response = auth_client.patch("/api/profile", json={"email": "hijack@example.com"})
    assert response.status_code == 400
