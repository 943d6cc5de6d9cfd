"""
Memory Storage - 记忆存储后端

按 URL scheme 选择后端:
- file:              本地 SQLite 文件 (SQLAlchemy)
- libsql/http(s)/ws(s): 远程 libSQL (sqlalchemy-libsql 方言)
- 未配置 / :memory: / 不支持的 scheme: 进程内存储
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path
import re
from typing import Any
from urllib.parse import urlsplit
import uuid

from pydantic import BaseModel, Field
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from core.memory.models import Base, MessageRecord, ScoreRecord, ThreadRecord
from utils.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_REMOTE_PROTOCOL = re.compile(r"^(libsql|https?|wss?):")


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ============================================================================
# 存储实体
# ============================================================================


class Thread(BaseModel):
    """会话线程"""

    id: str
    resource_id: str
    title: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class StoredMessage(BaseModel):
    """已持久化的消息"""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    thread_id: str
    resource_id: str
    role: str
    content: Any
    created_at: datetime = Field(default_factory=_utcnow)


class Score(BaseModel):
    """评分结果"""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    scorer_id: str
    entity_id: str
    run_id: str
    score: float
    reason: str | None = None
    input: Any = None
    output: Any = None
    created_at: datetime = Field(default_factory=_utcnow)


# ============================================================================
# 存储接口
# ============================================================================


class MemoryStorage(ABC):
    """记忆存储抽象基类"""

    kind: str = "base"

    async def setup(self) -> None:  # noqa: B027
        """初始化存储（建表等）"""

    @abstractmethod
    async def get_thread(self, thread_id: str) -> Thread | None:
        """获取线程"""
        ...

    @abstractmethod
    async def save_thread(self, thread: Thread) -> Thread:
        """保存线程（存在则更新）"""
        ...

    @abstractmethod
    async def list_messages(self, thread_id: str, limit: int | None = None) -> list[StoredMessage]:
        """按时间顺序返回线程最近的 limit 条消息"""
        ...

    @abstractmethod
    async def save_messages(self, messages: list[StoredMessage]) -> None:
        """追加消息"""
        ...

    @abstractmethod
    async def save_score(self, score: Score) -> None:
        """保存评分"""
        ...

    @abstractmethod
    async def list_scores(self, scorer_id: str | None = None) -> list[Score]:
        """列出评分"""
        ...

    async def close(self) -> None:  # noqa: B027
        """释放资源"""


class InMemoryStorage(MemoryStorage):
    """进程内存储（开发/测试，或未配置持久化 URL 时使用）"""

    kind = "memory"

    def __init__(self) -> None:
        self._threads: dict[str, Thread] = {}
        self._messages: dict[str, list[StoredMessage]] = {}
        self._scores: list[Score] = []

    async def get_thread(self, thread_id: str) -> Thread | None:
        return self._threads.get(thread_id)

    async def save_thread(self, thread: Thread) -> Thread:
        self._threads[thread.id] = thread
        return thread

    async def list_messages(self, thread_id: str, limit: int | None = None) -> list[StoredMessage]:
        messages = self._messages.get(thread_id, [])
        if limit is not None:
            messages = messages[-limit:] if limit > 0 else []
        return list(messages)

    async def save_messages(self, messages: list[StoredMessage]) -> None:
        for message in messages:
            self._messages.setdefault(message.thread_id, []).append(message)

    async def save_score(self, score: Score) -> None:
        self._scores.append(score)

    async def list_scores(self, scorer_id: str | None = None) -> list[Score]:
        return [s for s in self._scores if scorer_id is None or s.scorer_id == scorer_id]


class SQLStorage(MemoryStorage):
    """SQLAlchemy 存储

    使用同步引擎，所有数据库操作通过 asyncio.to_thread 执行，避免阻塞事件循环。
    """

    kind = "sql"

    def __init__(
        self,
        url: str,
        connect_args: dict[str, Any] | None = None,
        engine: Engine | None = None,
    ) -> None:
        self.url = url
        self._engine = engine or create_engine(url, connect_args=connect_args or {})
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)

    def _run(self, fn: Any) -> Any:
        with self._session_factory() as session, session.begin():
            return fn(session)

    async def setup(self) -> None:
        await asyncio.to_thread(Base.metadata.create_all, self._engine)
        logger.info("SQL memory storage ready: %s", self._engine.url.render_as_string())

    async def get_thread(self, thread_id: str) -> Thread | None:
        def query(session: Session) -> Thread | None:
            record = session.get(ThreadRecord, thread_id)
            if record is None:
                return None
            return Thread(
                id=record.id,
                resource_id=record.resource_id,
                title=record.title,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )

        return await asyncio.to_thread(self._run, query)

    async def save_thread(self, thread: Thread) -> Thread:
        def upsert(session: Session) -> None:
            session.merge(
                ThreadRecord(
                    id=thread.id,
                    resource_id=thread.resource_id,
                    title=thread.title,
                    created_at=thread.created_at,
                    updated_at=thread.updated_at,
                )
            )

        await asyncio.to_thread(self._run, upsert)
        return thread

    async def list_messages(self, thread_id: str, limit: int | None = None) -> list[StoredMessage]:
        if limit is not None and limit <= 0:
            return []

        def query(session: Session) -> list[StoredMessage]:
            stmt = (
                select(MessageRecord)
                .where(MessageRecord.thread_id == thread_id)
                .order_by(MessageRecord.seq.desc())
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            records = list(session.scalars(stmt))
            records.reverse()
            return [
                StoredMessage(
                    id=r.id,
                    thread_id=r.thread_id,
                    resource_id=r.resource_id,
                    role=r.role,
                    content=r.content,
                    created_at=r.created_at,
                )
                for r in records
            ]

        return await asyncio.to_thread(self._run, query)

    async def save_messages(self, messages: list[StoredMessage]) -> None:
        def insert(session: Session) -> None:
            session.add_all(
                MessageRecord(
                    id=m.id,
                    thread_id=m.thread_id,
                    resource_id=m.resource_id,
                    role=m.role,
                    content=m.content,
                    created_at=m.created_at,
                )
                for m in messages
            )

        await asyncio.to_thread(self._run, insert)

    async def save_score(self, score: Score) -> None:
        def insert(session: Session) -> None:
            session.add(ScoreRecord(**score.model_dump()))

        await asyncio.to_thread(self._run, insert)

    async def list_scores(self, scorer_id: str | None = None) -> list[Score]:
        def query(session: Session) -> list[Score]:
            stmt = select(ScoreRecord).order_by(ScoreRecord.created_at)
            if scorer_id is not None:
                stmt = stmt.where(ScoreRecord.scorer_id == scorer_id)
            return [
                Score(
                    id=r.id,
                    scorer_id=r.scorer_id,
                    entity_id=r.entity_id,
                    run_id=r.run_id,
                    score=r.score,
                    reason=r.reason,
                    input=r.input,
                    output=r.output,
                    created_at=r.created_at,
                )
                for r in session.scalars(stmt)
            ]

        return await asyncio.to_thread(self._run, query)

    async def close(self) -> None:
        await asyncio.to_thread(self._engine.dispose)


# ============================================================================
# 工厂
# ============================================================================


def can_use_url(url: str | None) -> bool:
    """是否为可用的持久化 URL"""
    if not url:
        return False
    if url.startswith("file:"):
        return True
    return bool(SUPPORTED_REMOTE_PROTOCOL.match(url))


def _file_path(url: str) -> str:
    path = url[len("file:") :]
    # file:///abs/path -> /abs/path
    if path.startswith("//"):
        path = path[2:]
    return path


def to_sqlalchemy_url(url: str, auth_token: str | None = None) -> tuple[str, dict[str, Any]]:
    """libSQL 风格 URL -> SQLAlchemy URL 与连接参数"""
    if url.startswith("file:"):
        return f"sqlite:///{_file_path(url)}", {"check_same_thread": False}

    parts = urlsplit(url)
    secure = parts.scheme in ("libsql", "https", "wss")
    target = parts.netloc + parts.path
    sa_url = f"sqlite+libsql://{target}?secure={'true' if secure else 'false'}"
    connect_args: dict[str, Any] = {}
    if auth_token:
        connect_args["auth_token"] = auth_token
    return sa_url, connect_args


def create_storage(url: str | None = None, auth_token: str | None = None) -> MemoryStorage:
    """根据 URL 创建存储后端，无可用 URL 时回退到内存存储"""
    if not can_use_url(url):
        if url and url != ":memory:":
            logger.warning("Unsupported storage URL scheme, falling back to in-memory storage")
        return InMemoryStorage()

    if url.startswith("file:"):
        # SQLite 不会自动创建目录
        Path(_file_path(url)).parent.mkdir(parents=True, exist_ok=True)

    sa_url, connect_args = to_sqlalchemy_url(url, auth_token)
    return SQLStorage(sa_url, connect_args=connect_args)
