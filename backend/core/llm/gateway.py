"""
LLM Gateway - LLM 网关实现

使用 LiteLLM 统一多模型接口
"""

import json
from typing import Any

import litellm
from litellm import acompletion
from pydantic import BaseModel, Field

from core.config import ModelConfig
from core.types import FinishReason, ToolCall, Usage
from utils.logging import get_logger

logger = get_logger(__name__)


class LLMResponse(BaseModel):
    """LLM 响应"""

    content: str | None = None
    tool_calls: list[ToolCall] | None = None
    finish_reason: FinishReason = FinishReason.UNKNOWN
    usage: Usage = Field(default_factory=Usage)


class LLMGateway:
    """
    LLM 网关

    按 ModelConfig 调用 LiteLLM:
    - 模型 ID / Base URL / API Key / 额外请求头
    - 工具调用解析
    - 用量统计
    """

    def __init__(self, config: ModelConfig) -> None:
        self.config = config

        # 回调由调用方自行处理
        litellm.success_callback = []
        litellm.failure_callback = []

    @property
    def model(self) -> str:
        return self.config.model

    async def chat(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        tool_choice: str | dict | None = None,
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> LLMResponse:
        """
        聊天补全

        Args:
            messages: 消息列表 (OpenAI 格式)
            tools: 工具定义列表
            tool_choice: 工具选择策略
            temperature: 温度参数
            response_format: 结构化输出格式

        Returns:
            LLMResponse
        """
        kwargs: dict[str, Any] = {
            **self.config.to_litellm_kwargs(),
            "messages": messages,
        }

        if tools:
            kwargs["tools"] = tools
            if tool_choice:
                kwargs["tool_choice"] = tool_choice
        if temperature is not None:
            kwargs["temperature"] = temperature
        if response_format:
            kwargs["response_format"] = response_format

        return await self._chat(**kwargs)

    async def _chat(self, **kwargs: Any) -> LLMResponse:
        """非流式调用"""
        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error("LLM call failed (%s): %s", kwargs.get("model"), e)
            raise

        choice = response.choices[0]
        message = choice.message

        tool_calls = None
        if getattr(message, "tool_calls", None):
            tool_calls = [
                ToolCall(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=self._parse_arguments(tc.function.arguments),
                )
                for tc in message.tool_calls
            ]

        usage = Usage()
        raw_usage = getattr(response, "usage", None)
        if raw_usage:
            usage = Usage(
                input_tokens=raw_usage.prompt_tokens or 0,
                output_tokens=raw_usage.completion_tokens or 0,
                total_tokens=raw_usage.total_tokens or 0,
            )

        return LLMResponse(
            content=message.content,
            tool_calls=tool_calls,
            finish_reason=FinishReason.from_provider(choice.finish_reason),
            usage=usage,
        )

    def _parse_arguments(self, arguments: str | None) -> dict[str, Any]:
        """解析工具参数"""
        if not arguments:
            return {}
        try:
            parsed = json.loads(arguments)
        except json.JSONDecodeError:
            return {"raw": arguments}
        return parsed if isinstance(parsed, dict) else {"value": parsed}
