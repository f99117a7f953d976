"""
人才端滑动写入：记录滑动；右滑（投递）时给职位所属公司发一条 application_received 通知。
"""
import logging

from jobswipe.jobs.schemas import Notification, Swipe

from .store import MemoryStore

logger = logging.getLogger(__name__)


def record_decision(store: MemoryStore, talent_id: str, job_id: str, direction: str) -> Swipe:
    """
    写入一次滑动决定。direction 为 right / left。
    同一职位重复决定时以最新一次为准；每次右滑都会通知公司。
    职位不存在时抛出 NotFoundError。
    """
    swipe, job, created = store.record_swipe(talent_id, job_id, direction)
    logger.info(
        "swipe talent=%s job=%s direction=%s%s",
        talent_id, job_id, direction, "" if created else " (superseded)",
    )
    if direction == "right":
        store.add_notification(Notification(
            user_id=job.company_id,
            type="application_received",
            title="New Application",
            message=f"A candidate has applied to {job.title}",
            related_job_id=job_id,
            related_talent_id=talent_id,
        ))
    return swipe
