"""
公共夹具：每个用例前清空内置存储与牌堆注册表；提供注册 / 登录辅助。
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from jobswipe.api.app import app
from jobswipe.api.deck import reset_registry
from jobswipe.api.store import get_store, reset_store

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _fresh_state():
    reset_store()
    reset_registry()
    yield


@pytest.fixture
def client():
    return TestClient(app)


def _email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture
def register(client):
    """注册并返回 (user_id, 鉴权头)。"""

    def _register(role: str = "talent", name: str = "Test User") -> tuple[str, dict]:
        body = {
            "email": _email(role),
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "role": role,
        }
        if role == "talent":
            body["full_name"] = name
        else:
            body["company_name"] = name
        r = client.post("/v1/auth/register", json=body)
        assert r.status_code == 200, r.text
        data = r.json()
        return data["user_id"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def admin_headers(client):
    email = _email("admin")
    get_store().create_user(email, PASSWORD, "admin")
    r = client.post("/v1/auth/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}
