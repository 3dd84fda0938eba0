"""
统一日志系统配置模块

All parser modules obtain their loggers through get_logger(__name__); the
first call configures the root logger from the RESERVE_TIME_LOG_* environment.
"""

import logging
import os
import sys
from typing import Optional


LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# 简化格式（命令行输出）
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

ENV_LOG_LEVEL = "RESERVE_TIME_LOG_LEVEL"
ENV_LOG_FILE = "RESERVE_TIME_LOG_FILE"
ENV_LOG_FORMAT = "RESERVE_TIME_LOG_FORMAT"

_configured = False


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT,
    console_output: bool = True,
):
    """
    配置全局日志系统

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. When None the level is
               read from RESERVE_TIME_LOG_LEVEL, falling back to WARNING.
        log_file: optional file that receives a copy of every record
        format_string: logging format string
        console_output: attach a stderr handler
    """
    global _configured

    if _configured:
        return

    if level is None:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING")

    log_level = LOG_LEVELS.get(level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(format_string)

    # stdout carries parse results, keep diagnostics on stderr
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    获取指定名称的日志器

    Args:
        name: logger name, normally __name__

    Returns:
        logging.Logger: configured logger
    """
    if not _configured:
        auto_setup()

    return logging.getLogger(name)


def set_module_log_level(module_name: str, level: str):
    """Override the level of a single module's logger."""
    logger = logging.getLogger(module_name)
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.WARNING))


def auto_setup():
    """
    根据环境变量自动配置日志系统

    环境变量:
        RESERVE_TIME_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
        RESERVE_TIME_LOG_FILE: log file path
        RESERVE_TIME_LOG_FORMAT: default or simple
    """
    log_level = os.environ.get(ENV_LOG_LEVEL, "WARNING")
    log_file = os.environ.get(ENV_LOG_FILE, None)
    log_format = os.environ.get(ENV_LOG_FORMAT, "default")

    format_string = SIMPLE_FORMAT if log_format == "simple" else DEFAULT_FORMAT

    setup_logging(level=log_level, log_file=log_file, format_string=format_string)
