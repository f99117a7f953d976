"""
职位、人才档案、公司、滑动记录与通知的数据模型，以及各接口的请求体。
字段与关系表结构一一对应；时间一律 UTC。
"""
from datetime import datetime, timezone
from typing import Literal, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

UserRole = Literal["talent", "company", "admin"]
ApplicationStatus = Literal["pending", "in_review", "accepted", "rejected"]
SwipeDirection = Literal["left", "right"]
JobType = Literal["remote", "onsite", "hybrid"]
NotificationType = Literal[
    "application_received",
    "application_status_changed",
    "new_job_match",
    "system",
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Profile(BaseModel):
    """人才档案：注册为 talent 时创建，id 与用户 id 相同。"""
    id: str
    full_name: str = Field("", description="姓名")
    bio: Optional[str] = None
    skills: list[str] = Field(default_factory=list, description="技能列表")
    experience_years: int = Field(0, ge=0, description="工作年限")
    education: Optional[str] = None
    location: Optional[str] = None
    cv_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Company(BaseModel):
    """公司资料：注册为 company 时创建，id 与用户 id 相同。"""
    id: str
    company_name: str = Field("", description="公司名称")
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Job(BaseModel):
    """职位：由公司发布，is_active 为 False 时不进入人才的滑卡列表。"""
    id: str = Field(default_factory=new_id)
    company_id: str
    title: str
    description: str
    skills_required: list[str] = Field(default_factory=list)
    experience_required: int = Field(0, ge=0, description="要求年限")
    location: Optional[str] = None
    job_type: JobType = "onsite"
    salary_range: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    company: Optional[Company] = Field(None, description="关联公司（查询时填充）")


class Swipe(BaseModel):
    """人才对职位的一次滑动；direction=right 即投递，application_status 由公司维护。"""
    id: str = Field(default_factory=new_id)
    talent_id: str
    job_id: str
    direction: SwipeDirection
    application_status: ApplicationStatus = "pending"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    job: Optional[Job] = None
    profile: Optional[Profile] = None


class Notification(BaseModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    type: NotificationType
    title: str
    message: str
    related_job_id: Optional[str] = None
    related_talent_id: Optional[str] = None
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow)


# ---------- 请求体 ----------


class RegisterRequest(BaseModel):
    """注册：talent 需填 full_name，company 需填 company_name。"""
    email: str = Field(..., min_length=3, description="邮箱")
    password: str = Field(..., description="密码")
    confirm_password: str = Field(..., description="确认密码")
    role: Literal["talent", "company"] = "talent"
    full_name: Optional[str] = None
    company_name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    """人才档案更新：只覆盖传入的字段，值为 null 的字段忽略。"""
    full_name: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[list[str]] = None
    experience_years: Optional[int] = Field(None, ge=0)
    education: Optional[str] = None
    location: Optional[str] = None
    cv_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    avatar_url: Optional[str] = None


class CompanyUpdate(BaseModel):
    company_name: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    logo_url: Optional[str] = None


class JobCreate(BaseModel):
    """发布职位：title 与 description 必填。"""
    title: str = Field("", description="职位名称")
    description: str = Field("", description="职位描述")
    skills_required: list[str] = Field(default_factory=list)
    experience_required: int = Field(0, ge=0)
    location: Optional[str] = None
    job_type: JobType = "onsite"
    salary_range: Optional[str] = None
    is_active: bool = True


class JobUpdate(BaseModel):
    """职位更新：只覆盖传入的字段，值为 null 的字段忽略。"""
    title: Optional[str] = None
    description: Optional[str] = None
    skills_required: Optional[list[str]] = None
    experience_required: Optional[int] = Field(None, ge=0)
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    salary_range: Optional[str] = None
    is_active: Optional[bool] = None


class JobFilters(BaseModel):
    """人才端职位筛选；job_type / max_experience 为 None 表示不限。"""
    job_type: Optional[JobType] = None
    max_experience: Optional[int] = Field(None, ge=0)
    location: Optional[str] = None
    skills: Optional[str] = Field(None, description="逗号分隔的技能关键词")

    @field_validator("job_type", "max_experience", mode="before")
    @classmethod
    def _all_means_any(cls, v):
        # 前端下拉框用 "all" 表示不限
        if isinstance(v, str) and v.strip().lower() in ("", "all"):
            return None
        return v


class SwipeRequest(BaseModel):
    job_id: str
    direction: SwipeDirection


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class DeckResetRequest(JobFilters):
    """重建滑卡队列：按筛选条件拉取职位，游标回到 0。"""


class DeckCommitRequest(BaseModel):
    """按钮决定：apply（右）或 pass（左）。"""
    direction: Literal["apply", "pass", "right", "left"]


class GestureRequest(BaseModel):
    """拖拽手势：begin / update（需 delta_x）/ end。"""
    phase: Literal["begin", "update", "end"]
    delta_x: Optional[float] = None
