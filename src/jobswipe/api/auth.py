"""
认证：从请求头取 Bearer token，经存储校验后把 user_id、role 注入请求上下文。

每个接口通过依赖显式拿到 AuthContext（进入路由时获取、请求结束即丢弃），不读取任何全局会话。
"""
import logging
from dataclasses import dataclass
from typing import Callable, Literal

from fastapi import Depends, Header, HTTPException

from jobswipe.core.config import min_password_length
from jobswipe.jobs.schemas import LoginRequest, RegisterRequest

from .store import ConflictError, get_store

logger = logging.getLogger(__name__)

Role = Literal["talent", "company", "admin"]

# 登录 / 注册后按角色跳转的页面
DASHBOARD_PATHS: dict[str, str] = {
    "talent": "/talent/dashboard",
    "company": "/company/dashboard",
    "admin": "/admin/dashboard",
}


@dataclass
class AuthContext:
    """请求上下文中的用户身份与角色。"""
    user_id: str
    role: Role
    email: str
    token: str


def api_error(status_code: int, code: str, message: str) -> HTTPException:
    """统一错误结构：detail = {code, message}。"""
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


def get_bearer_token(authorization: str | None = Header(None, alias="Authorization")) -> str | None:
    """从请求头取出 Bearer token；无头或格式不对返回 None。"""
    if not authorization or not isinstance(authorization, str):
        return None
    auth = authorization.strip()
    if not auth.lower().startswith("bearer "):
        return None
    token = auth[7:].strip()
    return token if token else None


def get_auth(authorization: str | None = Header(None, alias="Authorization")) -> AuthContext:
    """
    依赖项：校验 token 返回 AuthContext；无 token 或 token 无效抛出 401。
    角色以角色表为准（管理员可能在注册后被提升）。
    """
    token = get_bearer_token(authorization)
    if not token:
        raise api_error(401, "unauthorized", "missing or invalid authorization")
    store = get_store()
    user = store.resolve_token(token)
    if user is None:
        raise api_error(401, "unauthorized", "invalid or expired token")
    role = store.get_role(user.id) or user.role
    return AuthContext(user_id=user.id, role=role, email=user.email, token=token)


def require_role(*roles: str) -> Callable[..., AuthContext]:
    """依赖工厂：角色不在 roles 内时返回 403。"""

    def _dependency(auth: AuthContext = Depends(get_auth)) -> AuthContext:
        if auth.role not in roles:
            logger.warning("role %s denied (requires %s) user=%s", auth.role, "/".join(roles), auth.user_id)
            raise api_error(403, "forbidden", "you do not have access to this resource")
        return auth

    return _dependency


def _session_payload(user_id: str, role: str, token: str, message: str) -> dict:
    return {
        "ok": True,
        "message": message,
        "token": token,
        "user_id": user_id,
        "role": role,
        "redirect": DASHBOARD_PATHS.get(role, "/"),
    }


def register(body: RegisterRequest) -> dict:
    """注册：校验两次密码一致与长度，建用户 + 角色 + 档案/公司，签发 token。"""
    if body.password != body.confirm_password:
        raise api_error(400, "invalid_request", "passwords do not match")
    min_len = min_password_length()
    if len(body.password) < min_len:
        raise api_error(400, "invalid_request", f"password must be at least {min_len} characters")
    if body.role == "talent" and not (body.full_name or "").strip():
        raise api_error(400, "invalid_request", "full_name is required for talent accounts")
    if body.role == "company" and not (body.company_name or "").strip():
        raise api_error(400, "invalid_request", "company_name is required for company accounts")

    store = get_store()
    try:
        user = store.create_user(
            body.email,
            body.password,
            body.role,
            full_name=(body.full_name or "").strip() or None,
            company_name=(body.company_name or "").strip() or None,
        )
    except ConflictError:
        raise api_error(409, "email_taken", "an account with this email already exists")
    token = store.issue_token(user.id)
    return _session_payload(user.id, user.role, token, "account created successfully")


def login(body: LoginRequest) -> dict:
    store = get_store()
    user = store.authenticate(body.email, body.password)
    if user is None:
        logger.warning("login failed for %s", (body.email or "").strip().lower())
        raise api_error(401, "invalid_credentials", "invalid email or password")
    role = store.get_role(user.id) or user.role
    token = store.issue_token(user.id)
    logger.info("login user=%s role=%s", user.id, role)
    return _session_payload(user.id, role, token, "successfully logged in")


def logout(auth: AuthContext) -> dict:
    get_store().revoke_token(auth.token)
    return {"ok": True}
