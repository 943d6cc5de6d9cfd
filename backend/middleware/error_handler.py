"""
错误处理中间件

兜底处理未被异常处理器捕获的异常，保证客户端不会看到堆栈
"""

from typing import Any

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from api.errors import INTERNAL_ERROR
from app.responses import UTF8JSONResponse
from utils.logging import get_logger

logger = get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """错误处理中间件"""

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        """处理请求"""
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, e)
            return UTF8JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": INTERNAL_ERROR},
            )
