"""
Runtime Cache - 运行时缓存

单条目缓存：按 RuntimeConfig.signature() 命中。
- 相同签名：复用同一个运行时（构建中的请求共享同一个 Future）
- 签名变化：构建新的运行时并替换旧条目
- 构建失败：丢弃条目，下一个请求重新构建
"""

import asyncio
from collections.abc import Awaitable, Callable

from core.config import RuntimeConfig
from core.runtime.runtime import AgentRuntime, create_runtime
from utils.logging import get_logger

logger = get_logger(__name__)

RuntimeFactory = Callable[[RuntimeConfig], Awaitable[AgentRuntime]]


class RuntimeCache:
    """进程级运行时缓存"""

    def __init__(self, factory: RuntimeFactory | None = None) -> None:
        self._factory = factory or create_runtime
        self._entry: tuple[str, asyncio.Future[AgentRuntime]] | None = None
        self.builds = 0

    async def get(self, config: RuntimeConfig) -> AgentRuntime:
        """获取与配置匹配的运行时，必要时构建"""
        signature = config.signature()

        # 检查与替换之间没有 await
        entry = self._entry
        if entry is None or entry[0] != signature:
            future = asyncio.ensure_future(self._build(config))
            entry = (signature, future)
            self._entry = entry
            future.add_done_callback(lambda f, e=entry: self._on_built(e, f))

        # 单个请求被取消时不影响共享的构建任务
        return await asyncio.shield(entry[1])

    async def _build(self, config: RuntimeConfig) -> AgentRuntime:
        self.builds += 1
        logger.info("Building agent runtime (build #%d)", self.builds)
        return await self._factory(config)

    def _on_built(
        self,
        entry: tuple[str, asyncio.Future[AgentRuntime]],
        future: asyncio.Future[AgentRuntime],
    ) -> None:
        if future.cancelled():
            error: BaseException | None = asyncio.CancelledError()
        else:
            error = future.exception()
        if error is None:
            return

        logger.error("Agent runtime construction failed: %s", error)
        if self._entry is entry:
            self._entry = None

    async def aclose(self) -> None:
        """关闭当前运行时"""
        entry, self._entry = self._entry, None
        if entry is None:
            return

        future = entry[1]
        if not future.done():
            future.cancel()
            return
        if future.cancelled() or future.exception() is not None:
            return
        await future.result().aclose()
