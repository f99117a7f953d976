"""
人才端：档案读写、筛选职位列表、直接写入滑动、查看已投递职位。
"""
from jobswipe.jobs.filters import filter_jobs
from jobswipe.jobs.schemas import JobFilters, ProfileUpdate

from .auth import AuthContext, api_error
from .store import NotFoundError, get_store
from .swipes import record_decision


def get_profile(auth: AuthContext) -> dict:
    try:
        return get_store().get_profile(auth.user_id).model_dump(mode="json")
    except NotFoundError as e:
        raise api_error(404, "not_found", str(e))


def update_profile(auth: AuthContext, body: ProfileUpdate) -> dict:
    if body.skills is not None:
        body = body.model_copy(update={"skills": [s.strip() for s in body.skills if s.strip()]})
    try:
        return get_store().update_profile(auth.user_id, body).model_dump(mode="json")
    except NotFoundError as e:
        raise api_error(404, "not_found", str(e))


def list_jobs(auth: AuthContext, filters: JobFilters) -> dict:
    """在架职位，按筛选条件过滤并排除已滑过的，整表返回（不分页）。"""
    store = get_store()
    jobs = filter_jobs(
        store.list_jobs(active_only=True, with_company=True),
        filters,
        exclude_ids=store.swiped_job_ids(auth.user_id),
    )
    return {"jobs": [j.model_dump(mode="json") for j in jobs], "total": len(jobs)}


def swipe(auth: AuthContext, job_id: str, direction: str) -> dict:
    try:
        record = record_decision(get_store(), auth.user_id, job_id, direction)
    except NotFoundError as e:
        raise api_error(404, "not_found", str(e))
    return record.model_dump(mode="json")


def list_applications(auth: AuthContext) -> list[dict]:
    """已投递（右滑）的职位，附职位与公司信息，按时间倒序。"""
    swipes = get_store().list_swipes(talent_id=auth.user_id, direction="right", with_job=True)
    return [s.model_dump(mode="json") for s in swipes]
