"""
中间件模块

提供请求处理中间件
"""

from middleware.cors import CORS_HEADERS, CORSHeadersMiddleware
from middleware.error_handler import ErrorHandlerMiddleware
from middleware.logging import LoggingMiddleware

__all__ = [
    "CORS_HEADERS",
    "CORSHeadersMiddleware",
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",
]
