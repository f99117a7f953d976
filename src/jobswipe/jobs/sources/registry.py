"""根据配置返回当前使用的职位源。"""
from jobswipe.core.config import job_source_id
from jobswipe.jobs.sources.base import JobSource
from jobswipe.jobs.sources.store import StoreJobSource


def get_job_source(source_id: str | None = None) -> JobSource:
    """
    返回职位源实例。
    source_id 可选：store（默认）、mock。
    不传则从环境变量 JOBSWIPE_JOB_SOURCE 读取。
    """
    sid = (source_id or job_source_id()).strip().lower()
    if sid == "mock":
        from jobswipe.jobs.sources.mock import MockJobSource
        return MockJobSource()
    return StoreJobSource()
