"""
Runtime Config - 运行时配置解析

从环境绑定推导出规范化的 RuntimeConfig，并进一步得到 LiteLLM 调用参数。
纯函数，无网络或磁盘访问。
"""

from collections.abc import Mapping
import json
from typing import Any

from pydantic import BaseModel, ConfigDict

from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL_ID = "openai/gpt-4o-mini"


class RuntimeConfig(BaseModel):
    """运行时配置

    不可变，按值比较；signature() 作为运行时缓存的键。
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str | None = None
    base_url: str | None = None
    api_key: str | None = None
    extra_headers: str | None = None  # 原始 JSON 文本
    libsql_url: str | None = None
    libsql_auth_token: str | None = None

    def signature(self) -> str:
        """规范化序列化：键排序，省略 None 值"""
        return json.dumps(self.model_dump(exclude_none=True), sort_keys=True)


class ModelConfig(BaseModel):
    """LLM 调用配置（对应 LiteLLM acompletion 参数）"""

    model_config = ConfigDict(frozen=True)

    model: str = DEFAULT_MODEL_ID
    api_base: str | None = None
    api_key: str | None = None
    extra_headers: dict[str, str] | None = None

    @property
    def has_override(self) -> bool:
        """是否覆盖了提供商默认的连接参数"""
        return bool(self.api_base or self.api_key or self.extra_headers)

    def to_litellm_kwargs(self) -> dict[str, Any]:
        """转换为 acompletion 关键字参数"""
        kwargs: dict[str, Any] = {"model": self.model}
        if self.api_base:
            kwargs["api_base"] = self.api_base
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.extra_headers:
            kwargs["extra_headers"] = dict(self.extra_headers)
        return kwargs


def _read(bindings: Mapping[str, Any] | Any, key: str) -> str | None:
    if isinstance(bindings, Mapping):
        value = bindings.get(key)
        if value is None:
            value = bindings.get(key.upper())
    else:
        value = getattr(bindings, key, None)
    return value if isinstance(value, str) else None


def build_runtime_config(bindings: Mapping[str, Any] | Any) -> RuntimeConfig:
    """从环境绑定构建 RuntimeConfig

    Args:
        bindings: EnvBindings 实例或环境变量映射（键大小写均可）

    显式的 LLM_API_KEY 优先于旧版的 OPENAI_API_KEY，
    即使前者为空字符串也不会回退。
    """
    api_key = _read(bindings, "llm_api_key")
    if api_key is None:
        api_key = _read(bindings, "openai_api_key")

    return RuntimeConfig(
        model_id=_read(bindings, "llm_model_id"),
        base_url=_read(bindings, "llm_base_url"),
        api_key=api_key,
        extra_headers=_read(bindings, "llm_extra_headers"),
        libsql_url=_read(bindings, "libsql_url"),
        libsql_auth_token=_read(bindings, "libsql_auth_token"),
    )


def parse_extra_headers(raw: str | None) -> dict[str, str] | None:
    """解析额外请求头

    只接受 JSON 对象，只保留字符串值；格式错误时静默忽略。
    """
    if not raw:
        return None

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring malformed LLM_EXTRA_HEADERS")
        return None

    if not isinstance(parsed, dict):
        return None

    headers = {key: value for key, value in parsed.items() if isinstance(value, str)}
    return headers or None


def resolve_model_config(
    config: RuntimeConfig, default_model: str = DEFAULT_MODEL_ID
) -> ModelConfig:
    """从 RuntimeConfig 得到模型调用配置"""
    return ModelConfig(
        model=config.model_id or default_model,
        api_base=config.base_url or None,
        api_key=config.api_key or None,
        extra_headers=parse_extra_headers(config.extra_headers),
    )
