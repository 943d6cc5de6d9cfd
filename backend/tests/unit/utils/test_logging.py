"""
Logging 工具单元测试
"""

import logging

import pytest

from utils.logging import APP_LOGGERS, get_logger, setup_logging


@pytest.fixture
def reset_loggers():
    """测试后还原日志器状态"""
    saved = {}
    for name in (*APP_LOGGERS, "httpx"):
        target = logging.getLogger(name)
        saved[name] = (target.level, list(target.handlers), target.propagate)
    yield
    for name, (level, handlers, propagate) in saved.items():
        target = logging.getLogger(name)
        target.setLevel(level)
        target.handlers = handlers
        target.propagate = propagate


@pytest.mark.unit
class TestSetupLogging:
    """日志设置测试"""

    def test_get_logger_returns_named_logger(self):
        """测试: 返回同名日志器"""
        assert get_logger("core.runtime.cache").name == "core.runtime.cache"

    def test_development_uses_debug(self, reset_loggers):
        """测试: 开发环境使用 DEBUG 级别"""
        setup_logging("WARNING", is_development=True)

        assert logging.getLogger("core").level == logging.DEBUG

    def test_production_uses_configured_level(self, reset_loggers):
        """测试: 非开发环境使用配置的级别，第三方库为 WARNING"""
        setup_logging("ERROR", is_development=False)

        assert logging.getLogger("api").level == logging.ERROR
        assert logging.getLogger("httpx").level == logging.WARNING
