"""
注册、登录、登出与鉴权依赖：401 / 403、按角色跳转路径。
"""
from jobswipe.api.auth import get_bearer_token
from jobswipe.api.store import get_store

PASSWORD = "secret123"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "jobswipe"}


def test_register_talent_creates_profile(client):
    r = client.post("/v1/auth/register", json={
        "email": "Ada@Example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "role": "talent",
        "full_name": "Ada Lovelace",
    })
    assert r.status_code == 200
    data = r.json()
    assert data["role"] == "talent"
    assert data["redirect"] == "/talent/dashboard"
    assert data["token"]
    assert get_store().get_profile(data["user_id"]).full_name == "Ada Lovelace"


def test_register_company_creates_company(register, client):
    _, headers = register("company", "Acme")
    r = client.get("/v1/company/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["company_name"] == "Acme"


def test_register_password_mismatch_400(client):
    r = client.post("/v1/auth/register", json={
        "email": "x@example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD + "x",
        "full_name": "X",
    })
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "invalid_request"


def test_register_short_password_400(client):
    r = client.post("/v1/auth/register", json={
        "email": "x@example.com",
        "password": "abc",
        "confirm_password": "abc",
        "full_name": "X",
    })
    assert r.status_code == 400


def test_register_duplicate_email_409(client):
    body = {
        "email": "dup@example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "full_name": "Dup",
    }
    assert client.post("/v1/auth/register", json=body).status_code == 200
    r = client.post("/v1/auth/register", json={**body, "email": "DUP@example.com"})
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "email_taken"


def test_register_admin_role_rejected(client):
    r = client.post("/v1/auth/register", json={
        "email": "root@example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "role": "admin",
    })
    assert r.status_code == 422


def test_login_and_me(client):
    client.post("/v1/auth/register", json={
        "email": "co@example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "role": "company",
        "company_name": "Co",
    })
    r = client.post("/v1/auth/login", json={"email": "co@example.com", "password": PASSWORD})
    assert r.status_code == 200
    data = r.json()
    assert data["redirect"] == "/company/dashboard"
    me = client.get("/v1/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "company"
    assert me.json()["unread_count"] == 0


def test_login_wrong_password_401(client):
    client.post("/v1/auth/register", json={
        "email": "t@example.com",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "full_name": "T",
    })
    r = client.post("/v1/auth/login", json={"email": "t@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"]["code"] == "invalid_credentials"


def test_admin_login_redirect(client, admin_headers):
    r = client.get("/v1/me", headers=admin_headers)
    assert r.json()["role"] == "admin"


def test_missing_token_401(client):
    r = client.get("/v1/talent/jobs")
    assert r.status_code == 401


def test_invalid_token_401(client):
    r = client.get("/v1/me", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401


def test_wrong_role_403(client, register):
    _, headers = register("talent")
    r = client.get("/v1/company/jobs", headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"]["code"] == "forbidden"
    r = client.get("/v1/admin/overview", headers=headers)
    assert r.status_code == 403


def test_logout_revokes_token(client, register):
    _, headers = register("talent")
    assert client.post("/v1/auth/logout", headers=headers).status_code == 200
    assert client.get("/v1/me", headers=headers).status_code == 401


def test_get_bearer_token():
    assert get_bearer_token("Bearer abc") == "abc"
    assert get_bearer_token("bearer  abc ") == "abc"
    assert get_bearer_token("Token abc") is None
    assert get_bearer_token(None) is None
    assert get_bearer_token("Bearer ") is None
