"""
候选职位源：为滑卡队列提供有序职位列表。
- store：读取内置存储中的在架职位（默认）。
- mock：固定演示职位，无需存储，用于本地体验与测试。
"""
from .base import JobSource
from .mock import MockJobSource
from .store import StoreJobSource
from .registry import get_job_source

__all__ = ["JobSource", "MockJobSource", "StoreJobSource", "get_job_source"]
