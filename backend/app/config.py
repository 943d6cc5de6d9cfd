"""
Application Configuration Management

使用 Pydantic Settings 管理配置，支持环境变量和 .env 文件

- Settings: 应用级配置（进程内缓存）
- EnvBindings: 运行时环境绑定（模型、密钥、持久化），每次请求重新读取
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # 应用配置
    # ========================================================================
    app_name: str = "Agent-Worker"
    app_env: Literal["development", "staging", "production"] = "development"
    health_message: str = "Agent worker is running"

    # ========================================================================
    # 服务器配置
    # ========================================================================
    host: str = "0.0.0.0"
    port: int = 8787
    reload: bool = False

    # ========================================================================
    # Agent 执行配置
    # ========================================================================
    # 模型名称格式: provider/model_name (如 openai/gpt-4o-mini)
    default_model: str = "openai/gpt-4o-mini"
    agent_max_steps: int = 5
    memory_last_messages: int = 10
    scorer_sampling_rate: float = 1.0

    # ========================================================================
    # 天气服务配置 (Open-Meteo)
    # ========================================================================
    weather_geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    weather_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    http_timeout_seconds: float = 30.0

    # ========================================================================
    # 日志配置
    # ========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @property
    def is_development(self) -> bool:
        """是否为开发环境"""
        return self.app_env == "development"


class EnvBindings(BaseSettings):
    """运行时环境绑定

    与 Settings 不同，这里不做缓存：每个请求都重新读取，
    以便配置变更后运行时缓存能够感知并重建。
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    llm_model_id: str | None = None
    llm_base_url: str | None = None
    llm_api_key: str | None = None
    openai_api_key: str | None = None  # 旧版密钥名称，LLM_API_KEY 优先
    llm_extra_headers: str | None = None  # JSON 对象字符串
    libsql_url: str | None = None
    libsql_auth_token: str | None = None


@lru_cache
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
