"""候选职位源抽象：为滑卡队列提供有序职位列表。"""
from abc import ABC, abstractmethod
from jobswipe.jobs.schemas import Job


class JobSource(ABC):
    """职位源接口：返回在架职位，按发布时间倒序。"""

    @abstractmethod
    def fetch_jobs(self, limit: int | None = None) -> list[Job]:
        """拉取职位；limit 为 None 时返回全部。"""
        ...
