"""
Core Module - Agent 核心模块

包含:
- types: 核心类型定义
- config: 运行时配置解析
- llm: LLM Gateway
- memory: 记忆存储
- agents: Agent 实现
- workflows: 工作流
- scorers: 评分器
- runtime: 运行时与缓存
"""

from core.types import (
    AgentOutput,
    FinishReason,
    MemoryBinding,
    MessageRole,
    ToolCall,
    ToolResult,
    Usage,
)

__all__ = [
    "AgentOutput",
    "FinishReason",
    "MemoryBinding",
    "MessageRole",
    "ToolCall",
    "ToolResult",
    "Usage",
]
