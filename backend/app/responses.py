"""
Responses - 统一响应类型
"""

from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """显式声明 UTF-8 字符集的 JSON 响应"""

    media_type = "application/json; charset=utf-8"
