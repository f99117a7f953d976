"""
配置：从环境变量读取，供滑卡队列、API 与种子数据使用。
"""
import os
from pathlib import Path

# 可选加载 .env（若存在）：先项目根（与 pyproject.toml 同层），再当前工作目录
_env_paths = [
    Path(__file__).resolve().parents[3] / ".env",  # 从 src/jobswipe/core 往上的项目根
    Path.cwd() / ".env",
]
for _p in _env_paths:
    if _p.exists():
        from dotenv import load_dotenv
        load_dotenv(_p)
        break

# 原型中拖拽超过 100px 即判定为提交，约为卡片宽度的五分之一
DEFAULT_SWIPE_THRESHOLD = 100.0


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def swipe_threshold() -> float:
    """手势阈值 T（像素）：|位移| > T 时松手才提交决定。非法值回退默认。"""
    raw = os.getenv("JOBSWIPE_SWIPE_THRESHOLD", "").strip()
    if not raw:
        return DEFAULT_SWIPE_THRESHOLD
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_SWIPE_THRESHOLD
    return value if value > 0 else DEFAULT_SWIPE_THRESHOLD


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def log_level() -> str:
    """日志级别；不认识的级别名回退 INFO。"""
    level = (os.getenv("JOBSWIPE_LOG_LEVEL") or "INFO").strip().upper()
    return level if level in _LOG_LEVELS else "INFO"


def job_source_id() -> str:
    """候选职位源：store（默认，读内置存储）或 mock（固定示例职位）。"""
    return (os.getenv("JOBSWIPE_JOB_SOURCE") or "store").strip().lower()


def seed_on_startup() -> bool:
    """应用启动时是否写入演示公司与职位。"""
    return _env_bool("JOBSWIPE_SEED_ON_STARTUP")


def cors_origins() -> list[str]:
    """允许跨域的前端地址，逗号分隔；默认本地 Vite / React 开发端口。"""
    raw = os.getenv("JOBSWIPE_CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")
    return [o.strip() for o in raw.split(",") if o.strip()]


def min_password_length() -> int:
    raw = os.getenv("JOBSWIPE_MIN_PASSWORD_LENGTH", "").strip()
    return int(raw) if raw.isdigit() else 6
