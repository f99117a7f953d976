# 配置、日志

from .config import (
    swipe_threshold,
    log_level,
    job_source_id,
    seed_on_startup,
    min_password_length,
    cors_origins,
)
from .logs import setup_logging

__all__ = [
    "swipe_threshold",
    "log_level",
    "job_source_id",
    "seed_on_startup",
    "min_password_length",
    "cors_origins",
    "setup_logging",
]
