"""
人才端职位筛选：对内存中的职位列表做线性过滤，不做排序打分。
"""
from __future__ import annotations

from typing import Iterable

from jobswipe.jobs.schemas import Job, JobFilters


def parse_skill_terms(skills: str | None) -> list[str]:
    """把「React, TypeScript ,」这类输入拆成小写关键词，丢弃空项。"""
    if not skills:
        return []
    return [s.strip().lower() for s in skills.split(",") if s.strip()]


def matches_skills(job: Job, terms: list[str]) -> bool:
    """任一职位技能包含任一关键词即算命中；无关键词时不过滤。"""
    if not terms:
        return True
    return any(term in skill.lower() for skill in job.skills_required for term in terms)


def matches(job: Job, filters: JobFilters) -> bool:
    if not job.is_active:
        return False
    if filters.job_type and job.job_type != filters.job_type:
        return False
    if filters.max_experience is not None and job.experience_required > filters.max_experience:
        return False
    location = (filters.location or "").strip().lower()
    if location and location not in (job.location or "").lower():
        return False
    return matches_skills(job, parse_skill_terms(filters.skills))


def filter_jobs(
    jobs: Iterable[Job],
    filters: JobFilters | None = None,
    exclude_ids: Iterable[str] = (),
) -> list[Job]:
    """
    返回符合筛选条件、且不在 exclude_ids（已滑过的职位）中的职位，按发布时间倒序。
    """
    filters = filters or JobFilters()
    excluded = set(exclude_ids)
    result = [j for j in jobs if j.id not in excluded and matches(j, filters)]
    result.sort(key=lambda j: j.created_at, reverse=True)
    return result
