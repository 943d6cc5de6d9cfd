"""
Scorer Base - 评分器基类

评分器在 Agent 生成完成后对本次运行打分（0-1）。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from core.types import ToolCall


class ScorerRun(BaseModel):
    """一次 Agent 运行的评分输入"""

    run_id: str
    agent_name: str
    input_messages: list[dict[str, Any]] = Field(default_factory=list)
    output_text: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)


class ScoreResult(BaseModel):
    """评分结果"""

    score: float
    reason: str | None = None


class BaseScorer(ABC):
    """评分器基类"""

    id: ClassVar[str] = ""
    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abstractmethod
    async def score(self, run: ScorerRun) -> ScoreResult:
        """对一次运行打分"""
        raise NotImplementedError


@dataclass(frozen=True)
class ScorerBinding:
    """Agent 上挂载的评分器及其采样率"""

    scorer: BaseScorer
    sampling_rate: float = 1.0


def content_to_text(content: Any) -> str:
    """将消息内容（字符串 / 片段列表 / 对象）展开为纯文本"""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return " ".join(filter(None, (content_to_text(part) for part in content)))
    if isinstance(content, dict):
        if isinstance(content.get("text"), str):
            return content["text"]
        if "parts" in content:
            return content_to_text(content["parts"])
        if "content" in content:
            return content_to_text(content["content"])
    return ""
