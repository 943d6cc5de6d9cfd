"""
Runtime Cache 单元测试

测试单条目缓存的复用、重建、并发与失败重试
"""

import asyncio

import pytest

from core.config import RuntimeConfig
from core.runtime import RuntimeCache


class StubRuntime:
    """只记录关闭状态的运行时"""

    def __init__(self, config: RuntimeConfig):
        self.config = config
        self.closed = False

    async def aclose(self):
        self.closed = True


def make_factory(delay: float = 0.0, failures: int = 0):
    state = {"calls": 0, "failures": failures}

    async def factory(config: RuntimeConfig):
        state["calls"] += 1
        if delay:
            await asyncio.sleep(delay)
        if state["failures"] > 0:
            state["failures"] -= 1
            raise RuntimeError("storage unavailable")
        return StubRuntime(config)

    return factory, state


@pytest.mark.unit
class TestRuntimeCache:
    """运行时缓存测试"""

    @pytest.mark.asyncio
    async def test_same_config_returns_same_instance(self):
        """测试: 相同配置的连续请求只构建一次"""
        # Arrange
        factory, state = make_factory()
        cache = RuntimeCache(factory)
        config = RuntimeConfig(model_id="m", api_key="k")

        # Act
        first = await cache.get(config)
        second = await cache.get(RuntimeConfig(model_id="m", api_key="k"))

        # Assert
        assert first is second
        assert state["calls"] == 1
        assert cache.builds == 1

    @pytest.mark.asyncio
    async def test_api_key_change_rebuilds_once(self):
        """测试: 仅 API Key 变化时丢弃旧实例并构建一个新实例"""
        # Arrange
        factory, state = make_factory()
        cache = RuntimeCache(factory)

        # Act
        old = await cache.get(RuntimeConfig(api_key="k1"))
        new = await cache.get(RuntimeConfig(api_key="k2"))
        again = await cache.get(RuntimeConfig(api_key="k2"))

        # Assert
        assert old is not new
        assert new is again
        assert new.config.api_key == "k2"
        assert state["calls"] == 2
        # 被替换的运行时不会被关闭
        assert old.closed is False

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_construction(self):
        """测试: 并发请求共享同一次构建"""
        # Arrange
        factory, state = make_factory(delay=0.05)
        cache = RuntimeCache(factory)
        config = RuntimeConfig(model_id="m")

        # Act
        results = await asyncio.gather(*(cache.get(config) for _ in range(5)))

        # Assert
        assert state["calls"] == 1
        assert all(r is results[0] for r in results)

    @pytest.mark.asyncio
    async def test_failed_construction_is_retried(self):
        """测试: 构建失败时所有等待者收到异常，下一个请求重新构建"""
        # Arrange
        factory, state = make_factory(delay=0.01, failures=1)
        cache = RuntimeCache(factory)
        config = RuntimeConfig(model_id="m")

        # Act
        results = await asyncio.gather(cache.get(config), cache.get(config), return_exceptions=True)
        runtime = await cache.get(config)

        # Assert
        assert all(isinstance(r, RuntimeError) for r in results)
        assert isinstance(runtime, StubRuntime)
        assert state["calls"] == 2

    @pytest.mark.asyncio
    async def test_cancelled_request_does_not_cancel_construction(self):
        """测试: 单个请求被取消不影响共享构建"""
        # Arrange
        factory, state = make_factory(delay=0.05)
        cache = RuntimeCache(factory)
        config = RuntimeConfig(model_id="m")

        # Act
        waiter = asyncio.create_task(cache.get(config))
        await asyncio.sleep(0.01)
        waiter.cancel()
        runtime = await cache.get(config)

        # Assert
        assert isinstance(runtime, StubRuntime)
        assert state["calls"] == 1

    @pytest.mark.asyncio
    async def test_aclose_closes_current_runtime(self):
        """测试: 关闭缓存时关闭当前运行时"""
        # Arrange
        factory, _ = make_factory()
        cache = RuntimeCache(factory)
        runtime = await cache.get(RuntimeConfig())

        # Act
        await cache.aclose()

        # Assert
        assert runtime.closed is True

    @pytest.mark.asyncio
    async def test_aclose_without_entry(self):
        """测试: 没有条目时关闭为空操作"""
        factory, state = make_factory()
        cache = RuntimeCache(factory)

        await cache.aclose()

        assert state["calls"] == 0
