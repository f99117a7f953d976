"""
职位领域：数据模型、人才端筛选、候选职位源与演示数据。
"""
from .schemas import (
    Company,
    Job,
    JobFilters,
    Notification,
    Profile,
    Swipe,
)
from .filters import filter_jobs, parse_skill_terms
from .seed import build_seed_data

__all__ = [
    "Company",
    "Job",
    "JobFilters",
    "Notification",
    "Profile",
    "Swipe",
    "filter_jobs",
    "parse_skill_terms",
    "build_seed_data",
]
