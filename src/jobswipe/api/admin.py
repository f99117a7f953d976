"""
管理端：全站概览（统计 + 人才 / 公司 / 职位 / 投递列表）、写入演示数据、清空数据。
"""
import logging

from .auth import AuthContext
from .deck import reset_registry
from .store import get_store

logger = logging.getLogger(__name__)


def overview() -> dict:
    store = get_store()
    talents = store.list_profiles()
    companies = store.list_companies()
    names = {c.id: c.company_name for c in companies}
    jobs = store.list_jobs()
    applications = store.list_swipes(direction="right", with_job=True, with_profile=True)

    return {
        "stats": store.counts(),
        "talents": [t.model_dump(mode="json") for t in talents],
        "companies": [c.model_dump(mode="json") for c in companies],
        "jobs": [
            {**j.model_dump(mode="json"), "company_name": names.get(j.company_id)}
            for j in jobs
        ],
        "applications": [
            {
                "id": a.id,
                "talent_id": a.talent_id,
                "job_id": a.job_id,
                "full_name": a.profile.full_name if a.profile else None,
                "job_title": a.job.title if a.job else None,
                "application_status": a.application_status,
                "created_at": a.created_at.isoformat(),
            }
            for a in applications
        ],
    }


def seed() -> dict:
    n_companies, n_jobs = get_store().seed()
    return {
        "ok": True,
        "message": f"Created {n_companies} companies and {n_jobs} jobs",
        "companies": n_companies,
        "jobs": n_jobs,
    }


def clear(auth: AuthContext) -> dict:
    """清空业务数据，保留当前管理员自己的档案；所有牌堆一并丢弃。"""
    get_store().clear(keep_user_id=auth.user_id)
    reset_registry()
    logger.warning("admin %s cleared all data", auth.user_id)
    return {"ok": True, "message": "All data cleared"}
