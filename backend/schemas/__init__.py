"""
Schemas - Pydantic 数据模型

提供请求/响应的数据验证和序列化。
"""

from schemas.agent import (
    PROMPT_MAX_LENGTH,
    AgentResponse,
    ChatMessage,
    SceneScriptRequest,
    WeatherRequest,
    flatten_issues,
)

__all__ = [
    "PROMPT_MAX_LENGTH",
    "AgentResponse",
    "ChatMessage",
    "SceneScriptRequest",
    "WeatherRequest",
    "flatten_issues",
]
