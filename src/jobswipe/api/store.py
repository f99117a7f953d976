"""
内置存储：关系表（用户/角色、人才档案、公司、职位、滑动记录、通知）与会话 token 的进程内实现。

生产环境中这些能力由外部托管后端提供；此处为单机内存版本，供本地运行与测试。
所有读写在同一把锁内完成，返回的模型均为副本，调用方修改不会影响存储。
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Iterable, Optional

from jobswipe.jobs.schemas import (
    Company,
    CompanyUpdate,
    Job,
    JobCreate,
    JobUpdate,
    Notification,
    Profile,
    ProfileUpdate,
    Swipe,
    new_id,
    utcnow,
)
from jobswipe.jobs.seed import build_seed_data

logger = logging.getLogger(__name__)

_PBKDF2_ITERATIONS = 100_000


class StoreError(Exception):
    """存储层错误基类。"""


class NotFoundError(StoreError):
    """记录不存在，或不属于当前用户。"""


class ConflictError(StoreError):
    """唯一性冲突（如邮箱已注册）。"""


@dataclass
class User:
    """认证用户；password_hash 为空表示不可登录（如演示公司）。"""
    id: str
    email: str
    role: str
    password_hash: Optional[str] = None
    salt: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), _PBKDF2_ITERATIONS)
    return digest.hex()


def _copy(model):
    return model.model_copy(deep=True)


class MemoryStore:
    """进程内存储，接口与外部后端的表操作一一对应。"""

    def __init__(self):
        self._lock = RLock()
        self._users: dict[str, User] = {}
        self._emails: dict[str, str] = {}
        self._roles: dict[str, str] = {}
        self._tokens: dict[str, str] = {}
        self._profiles: dict[str, Profile] = {}
        self._companies: dict[str, Company] = {}
        self._jobs: dict[str, Job] = {}
        self._swipes: dict[str, Swipe] = {}
        self._notifications: dict[str, Notification] = {}

    # ---------- 用户与会话 ----------

    def create_user(
        self,
        email: str,
        password: str,
        role: str,
        full_name: str | None = None,
        company_name: str | None = None,
    ) -> User:
        """创建用户与角色记录；talent 同时建档案，company 同时建公司资料。"""
        key = (email or "").strip().lower()
        salt = secrets.token_hex(16)
        with self._lock:
            if key in self._emails:
                raise ConflictError(f"email already registered: {key}")
            user = User(
                id=new_id(),
                email=key,
                role=role,
                password_hash=hash_password(password, salt),
                salt=salt,
            )
            self._users[user.id] = user
            self._emails[key] = user.id
            self._roles[user.id] = role
            if role == "talent":
                self._profiles[user.id] = Profile(id=user.id, full_name=full_name or "")
            elif role == "company":
                self._companies[user.id] = Company(id=user.id, company_name=company_name or "")
        logger.info("user created id=%s role=%s", user.id, role)
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        key = (email or "").strip().lower()
        with self._lock:
            user_id = self._emails.get(key)
            user = self._users.get(user_id) if user_id else None
        if user is None or not user.password_hash:
            return None
        if not hmac.compare_digest(user.password_hash, hash_password(password, user.salt or "")):
            return None
        return user

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_role(self, user_id: str) -> str | None:
        with self._lock:
            return self._roles.get(user_id)

    def issue_token(self, user_id: str) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._tokens[token] = user_id
        return token

    def resolve_token(self, token: str) -> User | None:
        with self._lock:
            user_id = self._tokens.get(token)
            return self._users.get(user_id) if user_id else None

    def revoke_token(self, token: str) -> bool:
        with self._lock:
            return self._tokens.pop(token, None) is not None

    # ---------- 人才档案 / 公司资料 ----------

    def get_profile(self, user_id: str) -> Profile:
        with self._lock:
            profile = self._profiles.get(user_id)
            if profile is None:
                raise NotFoundError(f"profile {user_id} not found")
            return _copy(profile)

    def update_profile(self, user_id: str, changes: ProfileUpdate) -> Profile:
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            profile = self._profiles.get(user_id)
            if profile is None:
                raise NotFoundError(f"profile {user_id} not found")
            updated = profile.model_copy(update={**data, "updated_at": utcnow()})
            self._profiles[user_id] = updated
            return _copy(updated)

    def list_profiles(self) -> list[Profile]:
        with self._lock:
            return [_copy(p) for p in reversed(self._profiles.values())]

    def get_company(self, company_id: str) -> Company:
        with self._lock:
            company = self._companies.get(company_id)
            if company is None:
                raise NotFoundError(f"company {company_id} not found")
            return _copy(company)

    def update_company(self, company_id: str, changes: CompanyUpdate) -> Company:
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            company = self._companies.get(company_id)
            if company is None:
                raise NotFoundError(f"company {company_id} not found")
            updated = company.model_copy(update={**data, "updated_at": utcnow()})
            self._companies[company_id] = updated
            return _copy(updated)

    def list_companies(self) -> list[Company]:
        with self._lock:
            return [_copy(c) for c in reversed(self._companies.values())]

    # ---------- 职位 ----------

    def _with_company(self, job: Job) -> Job:
        company = self._companies.get(job.company_id)
        return job.model_copy(deep=True, update={"company": _copy(company) if company else None})

    def create_job(self, company_id: str, body: JobCreate) -> Job:
        job = Job(company_id=company_id, **body.model_dump())
        with self._lock:
            self._jobs[job.id] = job
        logger.info("job created id=%s company=%s", job.id, company_id)
        return _copy(job)

    def get_job(self, job_id: str, with_company: bool = False) -> Job:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise NotFoundError(f"job {job_id} not found")
            return self._with_company(job) if with_company else _copy(job)

    def _owned_job(self, company_id: str, job_id: str) -> Job:
        job = self._jobs.get(job_id)
        if job is None or job.company_id != company_id:
            raise NotFoundError(f"job {job_id} not found")
        return job

    def update_job(self, company_id: str, job_id: str, changes: JobUpdate) -> Job:
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            job = self._owned_job(company_id, job_id)
            updated = job.model_copy(update={**data, "updated_at": utcnow()})
            self._jobs[job_id] = updated
            return _copy(updated)

    def delete_job(self, company_id: str, job_id: str) -> None:
        """删除职位，连带删除该职位下的滑动记录。"""
        with self._lock:
            self._owned_job(company_id, job_id)
            del self._jobs[job_id]
            for sid in [s.id for s in self._swipes.values() if s.job_id == job_id]:
                del self._swipes[sid]
        logger.info("job deleted id=%s company=%s", job_id, company_id)

    def list_jobs(
        self,
        company_id: str | None = None,
        active_only: bool = False,
        with_company: bool = False,
    ) -> list[Job]:
        """按发布时间倒序（后插入的在前）。"""
        with self._lock:
            out = []
            for job in reversed(self._jobs.values()):
                if company_id is not None and job.company_id != company_id:
                    continue
                if active_only and not job.is_active:
                    continue
                out.append(self._with_company(job) if with_company else _copy(job))
            return out

    # ---------- 滑动记录 / 投递 ----------

    def record_swipe(self, talent_id: str, job_id: str, direction: str) -> tuple[Swipe, Job, bool]:
        """
        写入滑动记录；同一人才对同一职位再次决定时以最新一次为准（更新方向、状态重置为 pending）。
        返回 (记录, 写入时的职位快照, 是否新建)。
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise NotFoundError(f"job {job_id} not found")
            for swipe in self._swipes.values():
                if swipe.talent_id == talent_id and swipe.job_id == job_id:
                    updated = swipe.model_copy(update={
                        "direction": direction,
                        "application_status": "pending",
                        "updated_at": utcnow(),
                    })
                    self._swipes[swipe.id] = updated
                    return _copy(updated), _copy(job), False
            swipe = Swipe(talent_id=talent_id, job_id=job_id, direction=direction)
            self._swipes[swipe.id] = swipe
            return _copy(swipe), _copy(job), True

    def swiped_job_ids(self, talent_id: str) -> set[str]:
        with self._lock:
            return {s.job_id for s in self._swipes.values() if s.talent_id == talent_id}

    def get_swipe(self, swipe_id: str) -> Swipe:
        with self._lock:
            swipe = self._swipes.get(swipe_id)
            if swipe is None:
                raise NotFoundError(f"swipe {swipe_id} not found")
            return _copy(swipe)

    def list_swipes(
        self,
        talent_id: str | None = None,
        job_ids: Iterable[str] | None = None,
        direction: str | None = None,
        with_job: bool = False,
        with_profile: bool = False,
    ) -> list[Swipe]:
        wanted = set(job_ids) if job_ids is not None else None
        with self._lock:
            out = []
            for swipe in reversed(self._swipes.values()):
                if talent_id is not None and swipe.talent_id != talent_id:
                    continue
                if wanted is not None and swipe.job_id not in wanted:
                    continue
                if direction is not None and swipe.direction != direction:
                    continue
                update = {}
                if with_job and swipe.job_id in self._jobs:
                    update["job"] = self._with_company(self._jobs[swipe.job_id])
                if with_profile and swipe.talent_id in self._profiles:
                    update["profile"] = _copy(self._profiles[swipe.talent_id])
                out.append(swipe.model_copy(deep=True, update=update))
            return out

    def update_application_status(self, swipe_id: str, status: str) -> Swipe:
        with self._lock:
            swipe = self._swipes.get(swipe_id)
            if swipe is None:
                raise NotFoundError(f"swipe {swipe_id} not found")
            updated = swipe.model_copy(update={"application_status": status, "updated_at": utcnow()})
            self._swipes[swipe_id] = updated
            return _copy(updated)

    # ---------- 通知 ----------

    def add_notification(self, notification: Notification) -> Notification:
        with self._lock:
            self._notifications[notification.id] = notification
        return _copy(notification)

    def list_notifications(self, user_id: str) -> list[Notification]:
        with self._lock:
            return [_copy(n) for n in reversed(self._notifications.values()) if n.user_id == user_id]

    def unread_count(self, user_id: str) -> int:
        with self._lock:
            return sum(1 for n in self._notifications.values() if n.user_id == user_id and not n.read)

    def mark_read(self, user_id: str, notification_id: str) -> Notification:
        with self._lock:
            n = self._notifications.get(notification_id)
            if n is None or n.user_id != user_id:
                raise NotFoundError(f"notification {notification_id} not found")
            n.read = True
            return _copy(n)

    def mark_all_read(self, user_id: str) -> int:
        count = 0
        with self._lock:
            for n in self._notifications.values():
                if n.user_id == user_id and not n.read:
                    n.read = True
                    count += 1
        return count

    # ---------- 管理 ----------

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "total_talents": len(self._profiles),
                "total_companies": len(self._companies),
                "total_jobs": len(self._jobs),
                "total_applications": sum(1 for s in self._swipes.values() if s.direction == "right"),
            }

    def seed(self) -> tuple[int, int]:
        """写入演示公司（附 company 角色记录，不可登录）与职位，返回 (公司数, 职位数)。"""
        companies, jobs = build_seed_data()
        with self._lock:
            for company in companies:
                self._companies[company.id] = company
                self._roles[company.id] = "company"
            for job in jobs:
                self._jobs[job.id] = job
        logger.info("seeded %d companies and %d jobs", len(companies), len(jobs))
        return len(companies), len(jobs)

    def clear(self, keep_user_id: str | None = None) -> None:
        """清空通知、滑动记录、职位，以及除 keep_user_id 外的公司与人才档案。"""
        with self._lock:
            self._notifications.clear()
            self._swipes.clear()
            self._jobs.clear()
            self._companies = {k: v for k, v in self._companies.items() if k == keep_user_id}
            self._profiles = {k: v for k, v in self._profiles.items() if k == keep_user_id}
        logger.warning("store cleared (kept user %s)", keep_user_id)


_store = MemoryStore()


def get_store() -> MemoryStore:
    return _store


def reset_store() -> MemoryStore:
    """丢弃全部数据并返回新的存储实例（测试用）。"""
    global _store
    _store = MemoryStore()
    return _store
