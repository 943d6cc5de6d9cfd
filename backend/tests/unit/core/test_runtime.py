"""
Agent Runtime 单元测试
"""

import pytest

from core.agents import Agent
from core.config import RuntimeConfig
from core.memory import InMemoryStorage, SQLStorage
from core.runtime import AgentName, create_runtime
from core.workflows import WEATHER_WORKFLOW_ID, WeatherWorkflow
from tests.mocks.open_meteo_mock import create_mock_client


@pytest.mark.unit
class TestCreateRuntime:
    """运行时构建测试"""

    @pytest.mark.asyncio
    async def test_registers_agents_and_workflow(self, test_settings, gateway_factory, gateways):
        """测试: 注册两个 Agent 与天气工作流"""
        # Act
        runtime = await create_runtime(
            RuntimeConfig(model_id="openai/gpt-4.1", api_key="sk-1"),
            settings=test_settings,
            gateway_factory=gateway_factory,
            weather_client=create_mock_client(),
        )

        # Assert
        try:
            weather = runtime.get_agent(AgentName.WEATHER)
            scene = runtime.get_agent("sceneScriptAgent")
            assert isinstance(weather, Agent)
            assert weather.name == "Weather Agent"
            assert weather.tools.names() == ["weatherTool"]
            assert scene.name == "Scene Script Agent"
            assert scene.tools.names() == ["currentTimeTool"]
            assert isinstance(runtime.get_workflow(WEATHER_WORKFLOW_ID), WeatherWorkflow)
            assert runtime.get_workflow("missing") is None
            assert isinstance(runtime.storage, InMemoryStorage)
            assert len(gateways) == 1
            assert gateways[0].config.model == "openai/gpt-4.1"
            assert gateways[0].config.api_key == "sk-1"
        finally:
            await runtime.aclose()

    @pytest.mark.asyncio
    async def test_unknown_agent_returns_none(self, test_settings, gateway_factory):
        """测试: 未知名称返回 None"""
        runtime = await create_runtime(
            RuntimeConfig(),
            settings=test_settings,
            gateway_factory=gateway_factory,
            weather_client=create_mock_client(),
        )

        try:
            assert runtime.get_agent("plannerAgent") is None
        finally:
            await runtime.aclose()

    @pytest.mark.asyncio
    async def test_default_model_from_settings(self, test_settings, gateway_factory, gateways):
        """测试: 未配置模型 ID 时使用默认模型"""
        runtime = await create_runtime(
            RuntimeConfig(),
            settings=test_settings,
            gateway_factory=gateway_factory,
            weather_client=create_mock_client(),
        )

        try:
            assert gateways[0].config.model == test_settings.default_model
        finally:
            await runtime.aclose()

    @pytest.mark.asyncio
    async def test_file_url_uses_sql_storage(self, test_settings, gateway_factory, tmp_path):
        """测试: 配置 file: URL 时使用 SQL 存储"""
        runtime = await create_runtime(
            RuntimeConfig(libsql_url=f"file:{tmp_path / 'runtime.db'}"),
            settings=test_settings,
            gateway_factory=gateway_factory,
            weather_client=create_mock_client(),
        )

        try:
            assert isinstance(runtime.storage, SQLStorage)
        finally:
            await runtime.aclose()
