"""Memory Module - 记忆模块

- MemoryStorage: 存储后端（内存 / SQLite / libSQL）
- Memory: 线程记忆，供 Agent 读写对话历史
"""

from core.memory.memory import DEFAULT_LAST_MESSAGES, Memory
from core.memory.storage import (
    InMemoryStorage,
    MemoryStorage,
    Score,
    SQLStorage,
    StoredMessage,
    Thread,
    can_use_url,
    create_storage,
    to_sqlalchemy_url,
)

__all__ = [
    "DEFAULT_LAST_MESSAGES",
    "InMemoryStorage",
    "Memory",
    "MemoryStorage",
    "SQLStorage",
    "Score",
    "StoredMessage",
    "Thread",
    "can_use_url",
    "create_storage",
    "to_sqlalchemy_url",
]
