"""
Agent Schemas - Agent 端点请求/响应模型
"""

from collections.abc import Iterable
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from core.types import FinishReason, Usage

PROMPT_MAX_LENGTH = 4000

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
NonEmptyDict = Annotated[dict[str, Any], Field(min_length=1)]
Prompt = Annotated[str, StringConstraints(min_length=1, max_length=PROMPT_MAX_LENGTH)]

MessageContent = (
    NonEmptyStr | Annotated[list[NonEmptyStr | NonEmptyDict], Field(min_length=1)] | NonEmptyDict
)


class ChatMessage(BaseModel):
    """对话消息

    content 可以是非空文本、非空片段列表（文本或对象）、或非空对象。
    """

    role: Literal["user", "assistant", "system"]
    content: MessageContent


class SceneScriptRequest(BaseModel):
    """剧本速写请求：prompt 与 messages 二选一"""

    model_config = ConfigDict(populate_by_name=True)

    prompt: Prompt | None = None
    messages: list[ChatMessage] | None = None
    thread_id: str | None = Field(default=None, alias="threadId")
    resource_id: str | None = Field(default=None, alias="resourceId")

    @field_validator("prompt", "messages", "thread_id", "resource_id", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # 字段可以省略，但不能显式传 null
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Expected a value, received null.")
        return value

    @model_validator(mode="after")
    def check_prompt_or_messages(self) -> "SceneScriptRequest":
        if not self.prompt and not self.messages:
            raise PydanticCustomError("prompt_or_messages", "Provide either prompt or messages.")
        return self

    def to_messages(self) -> list[dict[str, Any]]:
        """转换为 Agent 输入消息；有 messages 时优先使用"""
        if self.messages:
            return [m.model_dump() for m in self.messages]
        return [{"role": "user", "content": self.prompt}]


class WeatherRequest(BaseModel):
    """天气请求"""

    prompt: Prompt


class AgentResponse(BaseModel):
    """Agent 生成结果"""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    usage: Usage
    finish_reason: FinishReason = Field(alias="finishReason")


def flatten_issues(errors: Iterable[Any]) -> dict[str, Any]:
    """将验证错误展开为 {formErrors, fieldErrors}

    请求体级别的错误进入 formErrors，字段错误按顶层字段名分组。
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}

    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        message = error.get("msg", "Invalid value")
        if not loc:
            form_errors.append(message)
        else:
            field_errors.setdefault(str(loc[0]), []).append(message)

    return {"formErrors": form_errors, "fieldErrors": field_errors}
