"""
Pytest Configuration - 测试配置

提供测试所需的 fixtures：
- 按脚本返回响应的 LLM 网关
- 注入假网关与 Open-Meteo MockTransport 的运行时缓存
- ASGI 测试客户端
"""

from collections.abc import AsyncGenerator
import warnings

from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio

# 抑制第三方库的警告
warnings.filterwarnings("ignore", category=RuntimeWarning, module="litellm")
warnings.filterwarnings("ignore", message=".*PydanticSerializationUnexpectedValue.*")

# pylint: disable=wrong-import-position
from api.deps import get_env_bindings  # noqa: E402
from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from core.config import ModelConfig, RuntimeConfig  # noqa: E402
from core.llm.gateway import LLMResponse  # noqa: E402
from core.runtime import RuntimeCache, create_runtime  # noqa: E402
from tests.mocks.llm_mock import FakeGateway  # noqa: E402
from tests.mocks.open_meteo_mock import create_mock_client  # noqa: E402
from tools.weather import OpenMeteoClient  # noqa: E402

# pylint: enable=wrong-import-position


# =============================================================================
# LLM
# =============================================================================


@pytest.fixture
def llm_script() -> list[LLMResponse]:
    """所有假网关共享的响应脚本"""
    return []


@pytest.fixture
def gateways() -> list[FakeGateway]:
    """记录运行时创建的网关"""
    return []


@pytest.fixture
def gateway_factory(llm_script, gateways):
    def factory(config: ModelConfig) -> FakeGateway:
        gateway = FakeGateway(llm_script, config=config)
        gateways.append(gateway)
        return gateway

    return factory


# =============================================================================
# Open-Meteo
# =============================================================================


@pytest_asyncio.fixture
async def weather_client() -> AsyncGenerator[OpenMeteoClient, None]:
    client = create_mock_client()
    yield client
    await client.aclose()


# =============================================================================
# 运行时与应用
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """评分器采样率为 0，避免评审请求消耗响应脚本"""
    return Settings(scorer_sampling_rate=0.0, memory_last_messages=10, agent_max_steps=5)


@pytest.fixture
def runtime_factory(test_settings, gateway_factory):
    async def factory(config: RuntimeConfig):
        return await create_runtime(
            config,
            settings=test_settings,
            gateway_factory=gateway_factory,
            weather_client=create_mock_client(),
        )

    return factory


@pytest_asyncio.fixture
async def runtime_cache(runtime_factory) -> AsyncGenerator[RuntimeCache, None]:
    cache = RuntimeCache(runtime_factory)
    yield cache
    await cache.aclose()


@pytest.fixture
def env_bindings() -> dict[str, str]:
    """请求时读取的环境绑定（可在测试中修改）"""
    return {}


@pytest.fixture
def app(runtime_cache, env_bindings):
    fastapi_app = create_app(runtime_cache=runtime_cache)
    fastapi_app.dependency_overrides[get_env_bindings] = lambda: dict(env_bindings)
    return fastapi_app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """创建测试客户端"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
