"""
JobSwipe HTTP 入口：人才滑卡投递、公司发布职位与处理投递、管理员总览。

鉴权：除 /health 与注册、登录外，所有接口都需 Authorization: Bearer <token>，
由 get_auth / require_role 依赖注入 AuthContext，角色不符返回 403。

滑卡：POST /v1/talent/deck 按筛选条件建牌堆，之后通过 commit（按钮）、gesture（拖拽三阶段）、
undo（回看上一张）操作；服务端维护游标，决定经 sink 写入滑动记录并通知公司。
"""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from jobswipe.core.config import cors_origins, seed_on_startup
from jobswipe.core.logs import setup_logging
from jobswipe.jobs.schemas import (
    ApplicationStatusUpdate,
    CompanyUpdate,
    DeckCommitRequest,
    DeckResetRequest,
    GestureRequest,
    JobCreate,
    JobFilters,
    JobUpdate,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    SwipeRequest,
)

from . import admin, company, deck, notifications, talent
from .auth import AuthContext, api_error, get_auth, login, logout, register, require_role
from .store import NotFoundError, get_store

setup_logging()
logger = logging.getLogger(__name__)

talent_only = require_role("talent")
company_only = require_role("company")
admin_only = require_role("admin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时按配置写入演示数据。"""
    if seed_on_startup():
        get_store().seed()
    logger.info("JobSwipe API started")
    yield
    logger.info("JobSwipe API shutting down")


app = FastAPI(
    title="JobSwipe API",
    description="人才滑卡投递、公司职位管理与管理员总览",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    """探活。"""
    return {"status": "ok", "service": "jobswipe"}


# ---------- 认证 ----------

@app.post("/v1/auth/register")
def auth_register(body: RegisterRequest):
    """注册 talent / company 账号，返回 token 与按角色的跳转路径。"""
    return register(body)


@app.post("/v1/auth/login")
def auth_login(body: LoginRequest):
    """登录：返回 token、角色与跳转路径（/talent、/company、/admin 仪表盘）。"""
    return login(body)


@app.post("/v1/auth/logout")
def auth_logout(auth: AuthContext = Depends(get_auth)):
    """登出：吊销 token，并丢弃该用户的牌堆。"""
    deck.drop_deck(auth.user_id)
    return logout(auth)


@app.get("/v1/me")
def me(auth: AuthContext = Depends(get_auth)):
    """当前会话身份与未读通知数（页头展示用）。"""
    return {
        "user_id": auth.user_id,
        "email": auth.email,
        "role": auth.role,
        "unread_count": get_store().unread_count(auth.user_id),
    }


# ---------- 人才端 ----------

@app.get("/v1/talent/profile")
def talent_profile(auth: AuthContext = Depends(talent_only)):
    return talent.get_profile(auth)


@app.put("/v1/talent/profile")
def talent_profile_update(body: ProfileUpdate, auth: AuthContext = Depends(talent_only)):
    return talent.update_profile(auth, body)


def _filters(
    job_type: str | None = None,
    max_experience: str | None = None,
    location: str | None = None,
    skills: str | None = None,
) -> JobFilters:
    try:
        return JobFilters(
            job_type=job_type,
            max_experience=max_experience,
            location=location,
            skills=skills,
        )
    except ValidationError as e:
        raise api_error(400, "invalid_request", f"invalid filters: {e.errors()[0].get('msg')}")


@app.get("/v1/talent/jobs")
def talent_jobs(filters: JobFilters = Depends(_filters), auth: AuthContext = Depends(talent_only)):
    """
    职位列表：job_type（remote/onsite/hybrid/all）、max_experience（要求年限上限）、
    location（包含匹配，不区分大小写）、skills（逗号分隔，任一命中即可）；已滑过的不再出现。
    """
    return talent.list_jobs(auth, filters)


@app.post("/v1/talent/swipes")
def talent_swipe(body: SwipeRequest, auth: AuthContext = Depends(talent_only)):
    """直接写入一次滑动（不经牌堆），右滑即投递并通知公司。"""
    return talent.swipe(auth, body.job_id, body.direction)


@app.get("/v1/talent/applications")
def talent_applications(auth: AuthContext = Depends(talent_only)):
    return talent.list_applications(auth)


@app.post("/v1/talent/deck")
def talent_deck_reset(body: DeckResetRequest, auth: AuthContext = Depends(talent_only)):
    """按筛选条件（重新）建牌堆，游标回到第一张。"""
    return deck.reset_deck(auth.user_id, body)


@app.get("/v1/talent/deck")
def talent_deck(auth: AuthContext = Depends(talent_only)):
    """当前卡、下一张预览、进度（position / total）与手势状态。"""
    return deck.get_deck(auth.user_id)


@app.post("/v1/talent/deck/commit")
def talent_deck_commit(body: DeckCommitRequest, auth: AuthContext = Depends(talent_only)):
    """按钮决定：apply 投递 / pass 跳过。牌堆已空时返回 409。"""
    return deck.commit_deck(auth.user_id, body.direction)


@app.post("/v1/talent/deck/gesture")
def talent_deck_gesture(body: GestureRequest, auth: AuthContext = Depends(talent_only)):
    """拖拽：begin → update(delta_x) → end；end 时位移超过阈值才提交。"""
    return deck.gesture_deck(auth.user_id, body.phase, body.delta_x)


@app.post("/v1/talent/deck/undo")
def talent_deck_undo(auth: AuthContext = Depends(talent_only)):
    """回看上一张；已写入的滑动记录不会撤回。"""
    return deck.undo_deck(auth.user_id)


# ---------- 公司端 ----------

@app.get("/v1/company/profile")
def company_profile(auth: AuthContext = Depends(company_only)):
    try:
        return get_store().get_company(auth.user_id).model_dump(mode="json")
    except NotFoundError as e:
        raise api_error(404, "not_found", str(e))


@app.put("/v1/company/profile")
def company_profile_update(body: CompanyUpdate, auth: AuthContext = Depends(company_only)):
    try:
        return get_store().update_company(auth.user_id, body).model_dump(mode="json")
    except NotFoundError as e:
        raise api_error(404, "not_found", str(e))


@app.get("/v1/company/jobs")
def company_jobs(auth: AuthContext = Depends(company_only)):
    return company.list_jobs(auth)


@app.post("/v1/company/jobs", status_code=201)
def company_job_create(body: JobCreate, auth: AuthContext = Depends(company_only)):
    return company.create_job(auth, body)


@app.put("/v1/company/jobs/{job_id}")
def company_job_update(job_id: str, body: JobUpdate, auth: AuthContext = Depends(company_only)):
    return company.update_job(auth, job_id, body)


@app.delete("/v1/company/jobs/{job_id}")
def company_job_delete(job_id: str, auth: AuthContext = Depends(company_only)):
    return company.delete_job(auth, job_id)


@app.get("/v1/company/applications")
def company_applications(auth: AuthContext = Depends(company_only)):
    return company.list_applications(auth)


@app.patch("/v1/company/applications/{swipe_id}")
def company_application_status(
    swipe_id: str,
    body: ApplicationStatusUpdate,
    auth: AuthContext = Depends(company_only),
):
    """更新投递状态（pending / in_review / accepted / rejected），并通知人才。"""
    return company.update_application_status(auth, swipe_id, body.status)


# ---------- 通知 ----------

@app.get("/v1/notifications")
def notification_list(auth: AuthContext = Depends(get_auth)):
    return notifications.list_notifications(auth)


@app.post("/v1/notifications/read-all")
def notification_read_all(auth: AuthContext = Depends(get_auth)):
    return notifications.mark_all_read(auth)


@app.post("/v1/notifications/{notification_id}/read")
def notification_read(notification_id: str, auth: AuthContext = Depends(get_auth)):
    return notifications.mark_read(auth, notification_id)


# ---------- 管理端 ----------

@app.get("/v1/admin/overview")
def admin_overview(auth: AuthContext = Depends(admin_only)):
    return admin.overview()


@app.post("/v1/admin/seed")
def admin_seed(auth: AuthContext = Depends(admin_only)):
    """写入 5 家演示公司与 10 个职位。"""
    return admin.seed()


@app.post("/v1/admin/clear")
def admin_clear(auth: AuthContext = Depends(admin_only)):
    """清空通知、滑动记录、职位及其他用户的档案 / 公司资料。"""
    return admin.clear(auth)
