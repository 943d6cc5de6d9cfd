"""
Agent Worker - Main Application

FastAPI 应用入口点
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
import warnings

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.errors import INTERNAL_ERROR, INVALID_PAYLOAD, NOT_FOUND
from api.router import api_router
from app.config import get_settings
from app.responses import UTF8JSONResponse
from core.runtime import RuntimeCache
from exceptions import AgentWorkerError, ConfigurationError, ValidationError
from middleware import CORSHeadersMiddleware, ErrorHandlerMiddleware, LoggingMiddleware
from schemas.agent import flatten_issues
from utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理"""
    # 启动时
    settings = get_settings()
    setup_logging(settings.log_level, settings.is_development)

    # 抑制 LiteLLM 内部的 Pydantic 序列化警告
    warnings.filterwarnings(
        "ignore",
        message=".*PydanticSerializationUnexpectedValue.*",
        category=UserWarning,
        module="pydantic",
    )

    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)

    yield

    # 关闭时
    await fastapi_app.state.runtime_cache.aclose()


# =============================================================================
# 全局异常处理器
# =============================================================================


def _error_response(status_code: int, message: str, **extra: Any) -> UTF8JSONResponse:
    """构建错误响应"""
    return UTF8JSONResponse(status_code=status_code, content={"error": message, **extra})


async def request_validation_error_handler(
    _request: Request,
    exc: RequestValidationError,
) -> UTF8JSONResponse:
    """处理请求体验证错误"""
    errors = list(exc.errors())
    logger.warning("Invalid request payload: %d issue(s)", len(errors))
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        INVALID_PAYLOAD,
        issues=flatten_issues(errors),
    )


async def http_exception_handler(
    _request: Request,
    exc: StarletteHTTPException,
) -> UTF8JSONResponse:
    """处理路由错误：未知路径与不支持的方法均返回 404"""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    return _error_response(exc.status_code, str(exc.detail))


async def configuration_error_handler(
    _request: Request,
    exc: ConfigurationError,
) -> UTF8JSONResponse:
    """处理配置错误"""
    logger.error("Configuration error: %s", exc.message)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def validation_error_handler(
    _request: Request,
    exc: ValidationError,
) -> UTF8JSONResponse:
    """处理验证错误"""
    logger.warning("Validation error: %s", exc.message)
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def agent_worker_error_handler(
    _request: Request,
    exc: AgentWorkerError,
) -> UTF8JSONResponse:
    """处理其余 Agent Worker 错误（上游服务失败等），不向客户端暴露细节"""
    logger.error("Agent worker error: %s", exc, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


# =============================================================================
# 应用工厂
# =============================================================================


def create_app(runtime_cache: RuntimeCache | None = None) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        runtime_cache: 运行时缓存（测试时可注入自定义工厂）
    """
    settings = get_settings()

    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Agent Worker HTTP API",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        default_response_class=UTF8JSONResponse,
        lifespan=lifespan,
    )
    fastapi_app.state.runtime_cache = runtime_cache or RuntimeCache()

    fastapi_app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    fastapi_app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    fastapi_app.add_exception_handler(ConfigurationError, configuration_error_handler)
    fastapi_app.add_exception_handler(ValidationError, validation_error_handler)
    fastapi_app.add_exception_handler(AgentWorkerError, agent_worker_error_handler)

    # 后添加的中间件在外层：CORS -> 日志 -> 错误兜底
    fastapi_app.add_middleware(ErrorHandlerMiddleware)
    fastapi_app.add_middleware(LoggingMiddleware)
    fastapi_app.add_middleware(CORSHeadersMiddleware)

    fastapi_app.include_router(api_router)
    return fastapi_app


app = create_app()


def run() -> None:
    """命令行入口：agent-worker"""
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.reload)
