"""
Memory - 会话记忆

将 Agent 的对话历史绑定到线程 (thread) 与资源 (resource) 上，
跨请求保持上下文。
"""

from datetime import UTC, datetime
from typing import Any

from core.memory.storage import MemoryStorage, StoredMessage, Thread
from core.types import MemoryBinding
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LAST_MESSAGES = 10


class Memory:
    """线程记忆"""

    def __init__(self, storage: MemoryStorage, last_messages: int = DEFAULT_LAST_MESSAGES) -> None:
        self.storage = storage
        self.last_messages = last_messages

    async def ensure_thread(self, binding: MemoryBinding) -> Thread:
        """获取线程，不存在则创建"""
        thread = await self.storage.get_thread(binding.thread)
        if thread is None:
            thread = await self.storage.save_thread(
                Thread(id=binding.thread, resource_id=binding.resource)
            )
            logger.debug("Created memory thread %s (resource=%s)", thread.id, thread.resource_id)
        return thread

    async def recall(self, binding: MemoryBinding) -> list[dict[str, Any]]:
        """返回线程最近的消息（LLM 消息格式）"""
        await self.ensure_thread(binding)
        stored = await self.storage.list_messages(binding.thread, limit=self.last_messages)
        return [{"role": m.role, "content": m.content} for m in stored]

    async def remember(self, binding: MemoryBinding, messages: list[dict[str, Any]]) -> None:
        """追加消息并刷新线程更新时间"""
        if not messages:
            return

        await self.storage.save_messages(
            [
                StoredMessage(
                    thread_id=binding.thread,
                    resource_id=binding.resource,
                    role=m["role"],
                    content=m["content"],
                )
                for m in messages
            ]
        )

        thread = await self.ensure_thread(binding)
        await self.storage.save_thread(thread.model_copy(update={"updated_at": datetime.now(UTC)}))
