"""
公司端：职位增删改、查看投递、更新投递状态（并通知人才）。
职位与投递只对所属公司可见，越权访问一律按不存在处理（404）。
"""
import logging

from jobswipe.jobs.schemas import JobCreate, JobUpdate, Notification

from .auth import AuthContext, api_error
from .store import NotFoundError, get_store

logger = logging.getLogger(__name__)

_STATUS_LABELS = {
    "pending": "pending",
    "in_review": "in review",
    "accepted": "accepted",
    "rejected": "rejected",
}


def _not_found(e: NotFoundError):
    return api_error(404, "not_found", str(e))


def create_job(auth: AuthContext, body: JobCreate) -> dict:
    """发布职位：title、description 必填。"""
    if not body.title.strip() or not body.description.strip():
        raise api_error(400, "invalid_request", "please fill in all required fields")
    body = body.model_copy(update={"skills_required": _clean_skills(body.skills_required)})
    job = get_store().create_job(auth.user_id, body)
    return job.model_dump(mode="json")


def _clean_skills(skills: list[str]) -> list[str]:
    """去空白、去重，保持原有顺序。"""
    out: list[str] = []
    for s in skills:
        s = s.strip()
        if s and s not in out:
            out.append(s)
    return out


def update_job(auth: AuthContext, job_id: str, body: JobUpdate) -> dict:
    if body.skills_required is not None:
        body = body.model_copy(update={"skills_required": _clean_skills(body.skills_required)})
    if body.title is not None and not body.title.strip():
        raise api_error(400, "invalid_request", "title cannot be empty")
    if body.description is not None and not body.description.strip():
        raise api_error(400, "invalid_request", "description cannot be empty")
    try:
        job = get_store().update_job(auth.user_id, job_id, body)
    except NotFoundError as e:
        raise _not_found(e)
    return job.model_dump(mode="json")


def delete_job(auth: AuthContext, job_id: str) -> dict:
    try:
        get_store().delete_job(auth.user_id, job_id)
    except NotFoundError as e:
        raise _not_found(e)
    return {"ok": True, "id": job_id}


def list_jobs(auth: AuthContext) -> list[dict]:
    return [j.model_dump(mode="json") for j in get_store().list_jobs(company_id=auth.user_id)]


def list_applications(auth: AuthContext) -> list[dict]:
    """本公司职位收到的投递（右滑），附职位与人才档案，按时间倒序。"""
    store = get_store()
    job_ids = [j.id for j in store.list_jobs(company_id=auth.user_id)]
    swipes = store.list_swipes(job_ids=job_ids, direction="right", with_job=True, with_profile=True)
    return [s.model_dump(mode="json") for s in swipes]


def update_application_status(auth: AuthContext, swipe_id: str, status: str) -> dict:
    """更新投递状态，并给人才发一条 application_status_changed 通知。"""
    store = get_store()
    try:
        swipe = store.get_swipe(swipe_id)
        job = store.get_job(swipe.job_id)
    except NotFoundError as e:
        raise _not_found(e)
    if job.company_id != auth.user_id or swipe.direction != "right":
        raise api_error(404, "not_found", f"application {swipe_id} not found")

    updated = store.update_application_status(swipe_id, status)
    store.add_notification(Notification(
        user_id=swipe.talent_id,
        type="application_status_changed",
        title="Application Update",
        message=f"Your application for {job.title} is now {_STATUS_LABELS.get(status, status)}",
        related_job_id=job.id,
        related_talent_id=swipe.talent_id,
    ))
    logger.info("application %s -> %s by company=%s", swipe_id, status, auth.user_id)
    return updated.model_dump(mode="json")
