"""
LLM Gateway - 大语言模型网关

通过 LiteLLM 调用任意 provider/model 形式的模型 ID，
支持自定义 Base URL、API Key 与额外请求头。
"""

from core.config import ModelConfig
from core.llm.gateway import LLMGateway, LLMResponse

__all__ = [
    "LLMGateway",
    "LLMResponse",
    "create_llm_gateway",
]


def create_llm_gateway(config: ModelConfig) -> LLMGateway:
    """
    创建 LLM Gateway 实例

    Args:
        config: 模型配置

    Returns:
        LLMGateway 实例
    """
    return LLMGateway(config=config)
