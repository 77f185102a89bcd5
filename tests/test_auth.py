"""Registro, login y refresh de tokens"""

from garden_crm.services.auth import create_access_token, create_tokens, verify_access_token, verify_refresh_token

API = "/api/v1"


def test_register_returns_tokens(api):
    response = api.post(
        f"{API}/auth/register",
        json={"email": "New@Example.com", "password": "long-enough", "full_name": "New Owner"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"

    me = api.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}).json()
    assert me["email"] == "new@example.com"
    assert me["full_name"] == "New Owner"


def test_register_duplicate_email(api, owner):
    response = api.post(f"{API}/auth/register", json={"email": "OWNER@example.com", "password": "long-enough"})

    assert response.status_code == 400


def test_register_short_password_is_field_error(api):
    response = api.post(f"{API}/auth/register", json={"email": "x@example.com", "password": "short"})

    assert response.status_code == 422
    assert "password" in response.json()["errors"]


def test_login(api, owner):
    response = api.post(f"{API}/auth/login", json={"email": "owner@example.com", "password": "secret-pass"})

    assert response.status_code == 200
    assert verify_access_token(response.json()["access_token"])["sub"] == str(owner.id)


def test_login_wrong_password(api, owner):
    response = api.post(f"{API}/auth/login", json={"email": "owner@example.com", "password": "nope-nope"})

    assert response.status_code == 401


def test_refresh(api, owner):
    _, refresh_token = create_tokens(str(owner.id), owner.email)

    response = api.post(f"{API}/auth/refresh", json={"refresh_token": refresh_token})

    assert response.status_code == 200
    assert verify_refresh_token(response.json()["refresh_token"]) is not None


def test_access_token_cannot_refresh(api, owner):
    access_token, _ = create_tokens(str(owner.id), owner.email)

    response = api.post(f"{API}/auth/refresh", json={"refresh_token": access_token})

    assert response.status_code == 401


def test_token_for_missing_account(api):
    token = create_access_token({"sub": "00000000-0000-0000-0000-000000000000"})

    response = api.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_owner_id_from_rejects_bad_subject():
    from garden_crm.services.auth import owner_id_from

    assert owner_id_from(None) is None
    assert owner_id_from({"sub": "not-a-uuid"}) is None
    assert str(owner_id_from({"sub": "00000000-0000-0000-0000-000000000001"})).endswith("1")
