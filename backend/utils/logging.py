"""
Logging Utilities - 日志工具

架构说明：
- get_logger() 是无依赖的，可以被任何模块安全导入
- setup_logging() 在应用启动时调用
"""

import logging
import os
import sys

# 本项目的顶层包，setup_logging 为它们统一挂载处理器
APP_LOGGERS = ("app", "api", "core", "middleware", "tools")


def get_logger(name: str) -> logging.Logger:
    """获取日志器（无依赖，可安全导入）"""
    return logging.getLogger(name)


def setup_logging(
    log_level: str | None = None,
    is_development: bool | None = None,
) -> None:
    """设置日志

    Args:
        log_level: 日志级别，默认从环境变量 LOG_LEVEL 读取
        is_development: 是否开发环境，默认从 APP_ENV 判断
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")
    if is_development is None:
        is_development = os.getenv("APP_ENV", "development") == "development"

    # 开发环境下使用 DEBUG 级别
    level = logging.DEBUG if is_development else getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    for name in APP_LOGGERS:
        app_logger = logging.getLogger(name)
        app_logger.setLevel(level)

        # 如果没有处理器，添加一个（不干扰 uvicorn 的日志）
        if not app_logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            app_logger.addHandler(handler)
            app_logger.propagate = False

    # 设置第三方库日志级别
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
