"""
CORS 中间件

- 任意路径的 OPTIONS 预检请求直接返回 204
- 所有响应附加固定的 CORS 头
"""

from typing import Any

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """CORS 中间件"""

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        """处理请求"""
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
