"""
Core Configuration Module

运行时配置解析：环境绑定 -> RuntimeConfig -> ModelConfig
"""

from .runtime_config import (
    DEFAULT_MODEL_ID,
    ModelConfig,
    RuntimeConfig,
    build_runtime_config,
    parse_extra_headers,
    resolve_model_config,
)

__all__ = [
    "DEFAULT_MODEL_ID",
    "ModelConfig",
    "RuntimeConfig",
    "build_runtime_config",
    "parse_extra_headers",
    "resolve_model_config",
]
