"""
日志：统一挂在 jobswipe 根 logger 上，各模块用 logging.getLogger(__name__) 取子 logger。
"""
import logging

from .config import log_level

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    初始化 jobswipe logger：单个控制台 handler，重复调用不会叠加 handler。
    level 不传则读 JOBSWIPE_LOG_LEVEL。
    """
    logger = logging.getLogger("jobswipe")
    logger.setLevel(level or log_level())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
