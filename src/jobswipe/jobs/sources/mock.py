"""Mock 职位源：返回固定的演示职位，不依赖存储，用于本地体验与测试。"""
from jobswipe.jobs.schemas import Job
from jobswipe.jobs.seed import build_seed_data
from .base import JobSource


class MockJobSource(JobSource):
    """内置 10 条演示职位（5 家公司 × 2），实例化时生成一次，之后列表保持不变。"""

    def __init__(self):
        companies, jobs = build_seed_data()
        by_id = {c.id: c for c in companies}
        self._jobs = [j.model_copy(update={"company": by_id[j.company_id]}) for j in jobs]

    def fetch_jobs(self, limit: int | None = None) -> list[Job]:
        jobs = [j for j in self._jobs if j.is_active]
        return jobs if limit is None else jobs[:limit]
