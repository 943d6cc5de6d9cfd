"""
Agent - LLM Agent 实现

执行流程:
1. 规范化输入消息为 LLM 格式
2. 绑定记忆线程时，读取最近的历史消息
3. 工具调用循环（LLM -> 工具 -> LLM），直到模型不再请求工具或达到最大步数
4. 将新消息写回记忆线程
5. 按采样率异步运行评分器
"""

import asyncio
import json
import random
from typing import Any
import uuid

from core.llm.gateway import LLMGateway
from core.memory.memory import Memory
from core.memory.storage import MemoryStorage, Score
from core.scorers.base import ScorerBinding, ScorerRun
from core.types import AgentOutput, FinishReason, MemoryBinding, MessageRole, ToolCall, ToolResult, Usage
from exceptions import ValidationError
from tools.registry import ToolRegistry
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_STEPS = 5


# ============================================================================
# 消息规范化
# ============================================================================


def _normalize_part(part: Any) -> dict[str, Any]:
    if isinstance(part, str):
        return {"type": "text", "text": part}
    if isinstance(part, dict):
        if "type" in part:
            return part
        if isinstance(part.get("text"), str):
            return {"type": "text", "text": part["text"]}
    return {"type": "text", "text": json.dumps(part, ensure_ascii=False)}


def normalize_content(content: Any) -> str | list[dict[str, Any]]:
    """将消息内容转换为 LLM 可接受的格式

    - 字符串保持不变
    - 片段列表逐个转换为 content part（字符串 -> text part）
    - 对象：含 parts 时展开，含 text 时取文本，带 type 时视为单个 part
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return [_normalize_part(part) for part in content]
    if isinstance(content, dict):
        if isinstance(content.get("parts"), list):
            return [_normalize_part(part) for part in content["parts"]]
        if isinstance(content.get("text"), str):
            return content["text"]
        if isinstance(content.get("content"), str):
            return content["content"]
        return [_normalize_part(content)]
    return str(content)


def normalize_message(message: Any) -> dict[str, Any]:
    """规范化单条消息"""
    if hasattr(message, "model_dump"):
        message = message.model_dump()
    role = message.get("role", MessageRole.USER.value)
    if isinstance(role, MessageRole):
        role = role.value
    return {"role": role, "content": normalize_content(message.get("content"))}


def _assistant_tool_message(content: str | None, calls: list[ToolCall]) -> dict[str, Any]:
    return {
        "role": MessageRole.ASSISTANT.value,
        "content": content,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {
                    "name": call.name,
                    "arguments": json.dumps(call.arguments, ensure_ascii=False),
                },
            }
            for call in calls
        ],
    }


def _tool_message(result: ToolResult) -> dict[str, Any]:
    content = result.output if result.success else json.dumps({"error": result.error})
    return {
        "role": MessageRole.TOOL.value,
        "tool_call_id": result.tool_call_id,
        "content": content,
    }


# ============================================================================
# Agent
# ============================================================================


class Agent:
    """
    LLM Agent

    持有系统指令、模型网关、工具、记忆与评分器。
    """

    def __init__(
        self,
        name: str,
        instructions: str,
        gateway: LLMGateway,
        tools: ToolRegistry | None = None,
        memory: Memory | None = None,
        scorers: dict[str, ScorerBinding] | None = None,
        score_storage: MemoryStorage | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> None:
        self.name = name
        self.instructions = instructions
        self.gateway = gateway
        self.tools = tools or ToolRegistry()
        self.memory = memory
        self.scorers = scorers or {}
        self.score_storage = score_storage
        self.max_steps = max_steps
        self._pending_scores: set[asyncio.Task] = set()

    async def generate(
        self,
        messages: list[Any],
        memory: MemoryBinding | None = None,
    ) -> AgentOutput:
        """
        生成回复

        Args:
            messages: 输入消息列表（role + content）
            memory: 记忆线程绑定（可选）

        Returns:
            AgentOutput（文本、用量、结束原因）
        """
        if not messages:
            raise ValidationError("At least one message is required")

        run_id = uuid.uuid4().hex
        input_messages = [normalize_message(m) for m in messages]

        history: list[dict[str, Any]] = []
        if memory and self.memory:
            history = await self.memory.recall(memory)

        conversation: list[dict[str, Any]] = [
            {"role": MessageRole.SYSTEM.value, "content": self.instructions},
            *history,
            *input_messages,
        ]
        tool_defs = self.tools.to_openai_tools()

        usage = Usage()
        text = ""
        finish_reason = FinishReason.UNKNOWN
        all_calls: list[ToolCall] = []
        all_results: list[ToolResult] = []

        for step in range(1, self.max_steps + 1):
            response = await self.gateway.chat(conversation, tools=tool_defs or None)
            usage = usage + response.usage
            finish_reason = response.finish_reason
            text = response.content or ""

            if not response.tool_calls or not tool_defs:
                break

            logger.debug(
                "Agent %s step %d: tool calls %s",
                self.name,
                step,
                [c.name for c in response.tool_calls],
            )
            conversation.append(_assistant_tool_message(response.content, response.tool_calls))
            results = await asyncio.gather(*(self.tools.execute(c) for c in response.tool_calls))
            conversation.extend(_tool_message(r) for r in results)
            all_calls.extend(response.tool_calls)
            all_results.extend(results)

        if memory and self.memory:
            new_messages = [m for m in input_messages if m["role"] != MessageRole.SYSTEM.value]
            if text:
                new_messages.append({"role": MessageRole.ASSISTANT.value, "content": text})
            await self.memory.remember(memory, new_messages)

        logger.info(
            "Agent %s finished: finish_reason=%s tokens=%d tool_calls=%d",
            self.name,
            finish_reason.value,
            usage.total_tokens,
            len(all_calls),
        )

        self._schedule_scorers(
            ScorerRun(
                run_id=run_id,
                agent_name=self.name,
                input_messages=input_messages,
                output_text=text,
                tool_calls=all_calls,
            )
        )

        return AgentOutput(
            text=text,
            usage=usage,
            finish_reason=finish_reason,
            tool_calls=all_calls,
            tool_results=all_results,
            run_id=run_id,
        )

    # ------------------------------------------------------------------------
    # 评分
    # ------------------------------------------------------------------------

    def _schedule_scorers(self, run: ScorerRun) -> None:
        for key, binding in self.scorers.items():
            if binding.sampling_rate <= 0 or random.random() >= binding.sampling_rate:
                continue
            task = asyncio.create_task(self._run_scorer(key, binding, run))
            self._pending_scores.add(task)
            task.add_done_callback(self._pending_scores.discard)

    async def _run_scorer(self, key: str, binding: ScorerBinding, run: ScorerRun) -> None:
        try:
            result = await binding.scorer.score(run)
            logger.info(
                "Scorer %s on %s (run %s): %.3f",
                key,
                self.name,
                run.run_id,
                result.score,
            )
            if self.score_storage:
                await self.score_storage.save_score(
                    Score(
                        scorer_id=binding.scorer.id,
                        entity_id=self.name,
                        run_id=run.run_id,
                        score=result.score,
                        reason=result.reason,
                        input=run.input_messages,
                        output=run.output_text,
                    )
                )
        except Exception as e:
            logger.warning("Scorer %s failed on %s: %s", key, self.name, e)

    async def drain_scorers(self) -> None:
        """等待所有进行中的评分任务"""
        if self._pending_scores:
            await asyncio.gather(*list(self._pending_scores), return_exceptions=True)
