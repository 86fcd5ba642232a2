"""
日志配置模块
"""
import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "anime-linker"
LOG_LEVEL_ENV = "ANIME_LINKER_LOGLEVEL"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    设置 anime-linker 根日志记录器，各模块使用 anime-linker.<模块名> 子记录器

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)，
            为空时读取环境变量 ANIME_LINKER_LOGLEVEL，默认 INFO

    Returns:
        配置好的根日志记录器
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # 避免重复添加处理器
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    return logger
