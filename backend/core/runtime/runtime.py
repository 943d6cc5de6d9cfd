"""
Agent Runtime - Agent 运行时

一个 RuntimeConfig 对应一个运行时实例，包含:
- 具名 Agent（weatherAgent / sceneScriptAgent）
- 记忆存储
- 天气工作流
"""

from collections.abc import Callable
from enum import Enum

from app.config import Settings, get_settings
from core.agents.base import Agent
from core.agents.factory import create_scene_script_agent, create_weather_agent
from core.config import ModelConfig, RuntimeConfig, resolve_model_config
from core.llm.gateway import LLMGateway
from core.memory.storage import MemoryStorage, create_storage
from core.workflows.weather import WEATHER_WORKFLOW_ID, WeatherWorkflow
from tools.weather import OpenMeteoClient
from utils.logging import get_logger

logger = get_logger(__name__)

GatewayFactory = Callable[[ModelConfig], LLMGateway]


class AgentName(str, Enum):
    """已注册的 Agent 名称"""

    WEATHER = "weatherAgent"
    SCENE_SCRIPT = "sceneScriptAgent"


class AgentRuntime:
    """Agent 运行时"""

    def __init__(
        self,
        config: RuntimeConfig,
        storage: MemoryStorage,
        weather_client: OpenMeteoClient,
    ) -> None:
        self.config = config
        self.storage = storage
        self.weather_client = weather_client
        self._agents: dict[AgentName, Agent] = {}
        self._workflows: dict[str, WeatherWorkflow] = {}

    def register_agent(self, name: AgentName, agent: Agent) -> None:
        self._agents[name] = agent

    def register_workflow(self, workflow: WeatherWorkflow) -> None:
        self._workflows[workflow.id] = workflow

    def get_agent(self, name: AgentName | str) -> Agent | None:
        """按名称获取 Agent，未注册时返回 None"""
        try:
            key = AgentName(name)
        except ValueError:
            return None
        return self._agents.get(key)

    def get_workflow(self, workflow_id: str) -> WeatherWorkflow | None:
        return self._workflows.get(workflow_id)

    async def aclose(self) -> None:
        """等待评分任务完成并释放资源"""
        for agent in self._agents.values():
            await agent.drain_scorers()
        await self.weather_client.aclose()
        await self.storage.close()


async def create_runtime(
    config: RuntimeConfig,
    settings: Settings | None = None,
    gateway_factory: GatewayFactory | None = None,
    weather_client: OpenMeteoClient | None = None,
) -> AgentRuntime:
    """
    根据 RuntimeConfig 构建运行时

    Args:
        config: 运行时配置
        settings: 应用配置（默认取全局配置）
        gateway_factory: LLM Gateway 工厂（测试时可注入）
        weather_client: Open-Meteo 客户端（测试时可注入）

    Returns:
        AgentRuntime 实例
    """
    settings = settings or get_settings()
    model_config = resolve_model_config(config, default_model=settings.default_model)
    gateway = (gateway_factory or LLMGateway)(model_config)

    storage = create_storage(config.libsql_url, config.libsql_auth_token)
    await storage.setup()

    weather_client = weather_client or OpenMeteoClient(
        geocoding_url=settings.weather_geocoding_url,
        forecast_url=settings.weather_forecast_url,
        timeout=settings.http_timeout_seconds,
    )

    runtime = AgentRuntime(config=config, storage=storage, weather_client=weather_client)
    runtime.register_agent(
        AgentName.WEATHER,
        create_weather_agent(gateway, storage, weather_client, settings),
    )
    runtime.register_agent(
        AgentName.SCENE_SCRIPT,
        create_scene_script_agent(gateway, storage, settings),
    )
    runtime.register_workflow(
        WeatherWorkflow(weather_client, lambda: runtime.get_agent(AgentName.WEATHER))
    )

    logger.info(
        "Agent runtime created: model=%s storage=%s workflows=%s",
        model_config.model,
        type(storage).__name__,
        [WEATHER_WORKFLOW_ID],
    )
    return runtime
