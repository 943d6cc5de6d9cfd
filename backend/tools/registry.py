"""
Tool Registry - 工具注册表

管理单个 Agent 可用工具的注册、检索与执行
"""

import time
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from core.types import ToolCall, ToolResult
from exceptions import ToolExecutionError
from tools.base import BaseTool
from utils.logging import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """工具注册表"""

    def __init__(self, tools: list[BaseTool] | None = None) -> None:
        self._tools: dict[str, BaseTool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: BaseTool) -> None:
        """注册工具实例"""
        self._tools[tool.name] = tool

    def get(self, name: str) -> BaseTool | None:
        """获取工具"""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def to_openai_tools(self) -> list[dict[str, Any]]:
        """转换为 OpenAI 工具格式"""
        return [t.to_openai_tool() for t in self._tools.values()]

    async def execute(self, call: ToolCall) -> ToolResult:
        """执行工具

        工具异常不会向上抛出，而是作为错误结果返回给模型。
        """
        tool = self.get(call.name)
        if not tool:
            return ToolResult(
                tool_call_id=call.id,
                success=False,
                output="",
                error=f"Tool not found: {call.name}",
            )

        start = time.perf_counter()
        try:
            result = await tool.execute(**call.arguments)
        except PydanticValidationError as e:
            return ToolResult(
                tool_call_id=call.id,
                success=False,
                output="",
                error=f"Invalid arguments for {call.name}: {e.errors(include_url=False)}",
            )
        except ToolExecutionError as e:
            logger.info("Tool %s reported an error: %s", call.name, e.message)
            return ToolResult(tool_call_id=call.id, success=False, output="", error=e.message)
        except Exception as e:
            # 提供详细的错误信息，包括异常类型和消息
            error_msg = f"{type(e).__name__}: {e!s}" if str(e) else type(e).__name__
            logger.warning("Tool %s failed: %s", call.name, error_msg)
            return ToolResult(
                tool_call_id=call.id,
                success=False,
                output="",
                error=f"Tool execution error: {error_msg}",
            )

        duration_ms = int((time.perf_counter() - start) * 1000)
        return result.model_copy(update={"tool_call_id": call.id, "duration_ms": duration_ms})
