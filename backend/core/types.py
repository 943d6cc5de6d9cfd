"""
Core Types - Agent 核心类型定义

提供:
- 枚举类型
- Pydantic 模型 (运行时验证)
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# 基础枚举类型
# ============================================================================


class MessageRole(str, Enum):
    """消息角色"""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FinishReason(str, Enum):
    """生成结束原因（对外暴露的取值）"""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool-calls"
    CONTENT_FILTER = "content-filter"
    ERROR = "error"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def from_provider(cls, value: str | None) -> FinishReason:
        """将 OpenAI 风格的 finish_reason 转换为对外取值"""
        if not value:
            return cls.UNKNOWN
        normalized = value.replace("_", "-")
        if normalized == "function-call":
            return cls.TOOL_CALLS
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER


# ============================================================================
# Pydantic 模型 (运行时验证)
# ============================================================================


class ToolCall(BaseModel):
    """工具调用"""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: dict[str, Any]


class ToolResult(BaseModel):
    """工具执行结果"""

    model_config = ConfigDict(frozen=True)

    tool_call_id: str
    success: bool
    output: str
    error: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)


class Usage(BaseModel):
    """Token 用量"""

    model_config = ConfigDict(populate_by_name=True)

    input_tokens: int = Field(default=0, alias="inputTokens")
    output_tokens: int = Field(default=0, alias="outputTokens")
    total_tokens: int = Field(default=0, alias="totalTokens")

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


class AgentOutput(BaseModel):
    """Agent 生成结果"""

    text: str
    usage: Usage = Field(default_factory=Usage)
    finish_reason: FinishReason = FinishReason.UNKNOWN
    tool_calls: list[ToolCall] = Field(default_factory=list)
    tool_results: list[ToolResult] = Field(default_factory=list)
    run_id: str | None = None


class MemoryBinding(BaseModel):
    """记忆线程绑定"""

    model_config = ConfigDict(frozen=True)

    thread: str
    resource: str
