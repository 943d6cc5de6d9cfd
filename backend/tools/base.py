"""
Tool Base - 工具基类

提供工具的基础实现
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel

from core.types import ToolResult


class ToolParameters(BaseModel):
    """工具参数基类"""

    pass


class BaseTool(ABC):
    """
    工具基类

    所有工具必须继承此类并实现 execute 方法
    """

    # 工具元数据 (子类必须覆盖)
    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    # 参数模型 (可选)
    parameters_model: ClassVar[type[ToolParameters] | None] = None

    @property
    def parameters(self) -> dict[str, Any]:
        """获取 JSON Schema 参数定义"""
        if self.parameters_model:
            return self.parameters_model.model_json_schema()
        return {"type": "object", "properties": {}}

    @abstractmethod
    async def execute(self, **kwargs: Any) -> ToolResult:
        """执行工具"""
        raise NotImplementedError

    def to_openai_tool(self) -> dict[str, Any]:
        """转换为 OpenAI 工具格式"""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
