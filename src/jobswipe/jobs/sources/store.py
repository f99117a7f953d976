"""存储职位源：读取内置存储中的在架职位（附带公司信息）。"""
from jobswipe.jobs.schemas import Job
from .base import JobSource


class StoreJobSource(JobSource):

    def __init__(self, store=None):
        if store is None:
            from jobswipe.api.store import get_store
            store = get_store()
        self.store = store

    def fetch_jobs(self, limit: int | None = None) -> list[Job]:
        jobs = self.store.list_jobs(active_only=True, with_company=True)
        return jobs if limit is None else jobs[:limit]
