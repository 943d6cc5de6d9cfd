"""
Memory Storage 单元测试

测试内存存储、SQLite 存储与 URL 路由
"""

import pytest
import pytest_asyncio

from core.memory import (
    InMemoryStorage,
    Memory,
    Score,
    SQLStorage,
    StoredMessage,
    Thread,
    can_use_url,
    create_storage,
    to_sqlalchemy_url,
)
from core.types import MemoryBinding


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def storage(request, tmp_path):
    """两种后端跑同一组用例"""
    if request.param == "memory":
        backend = InMemoryStorage()
    else:
        backend = create_storage(f"file:{tmp_path / 'memory.db'}")
    await backend.setup()
    yield backend
    await backend.close()


@pytest.mark.unit
class TestStorageBackends:
    """存储后端测试"""

    @pytest.mark.asyncio
    async def test_thread_roundtrip(self, storage):
        """测试: 保存并读取线程"""
        await storage.save_thread(Thread(id="t1", resource_id="r1", title="Draft"))

        thread = await storage.get_thread("t1")

        assert thread is not None
        assert thread.resource_id == "r1"
        assert thread.title == "Draft"
        assert await storage.get_thread("missing") is None

    @pytest.mark.asyncio
    async def test_list_messages_returns_latest_in_order(self, storage):
        """测试: limit 返回最近 N 条消息，按时间正序"""
        await storage.save_thread(Thread(id="t1", resource_id="r1"))
        await storage.save_messages(
            [
                StoredMessage(thread_id="t1", resource_id="r1", role="user", content=f"m{i}")
                for i in range(5)
            ]
        )

        messages = await storage.list_messages("t1", limit=3)

        assert [m.content for m in messages] == ["m2", "m3", "m4"]
        assert len(await storage.list_messages("t1")) == 5
        assert await storage.list_messages("t1", limit=0) == []

    @pytest.mark.asyncio
    async def test_structured_content_is_preserved(self, storage):
        """测试: 结构化消息内容原样保存"""
        content = [{"type": "text", "text": "hello"}]
        await storage.save_messages(
            [StoredMessage(thread_id="t2", resource_id="r", role="user", content=content)]
        )

        messages = await storage.list_messages("t2")

        assert messages[0].content == content

    @pytest.mark.asyncio
    async def test_scores_filtered_by_scorer(self, storage):
        """测试: 按评分器过滤评分"""
        await storage.save_score(Score(scorer_id="a", entity_id="agent", run_id="r1", score=1.0))
        await storage.save_score(Score(scorer_id="b", entity_id="agent", run_id="r1", score=0.2))

        assert [s.score for s in await storage.list_scores("b")] == [0.2]
        assert len(await storage.list_scores()) == 2


@pytest.mark.unit
class TestStorageRouting:
    """存储 URL 路由测试"""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            (None, False),
            ("", False),
            (":memory:", False),
            ("postgres://db", False),
            ("file:./agent.db", True),
            ("libsql://db.turso.io", True),
            ("https://db.example.com", True),
            ("wss://db.example.com", True),
        ],
    )
    def test_can_use_url(self, url, expected):
        """测试: 支持的 URL scheme"""
        assert can_use_url(url) is expected

    def test_file_url_maps_to_sqlite(self):
        """测试: file: URL 映射为 SQLite"""
        assert to_sqlalchemy_url("file:./data/app.db")[0] == "sqlite:///./data/app.db"
        assert to_sqlalchemy_url("file:///var/data/app.db")[0] == "sqlite:////var/data/app.db"

    def test_remote_url_maps_to_libsql(self):
        """测试: 远程 URL 映射为 libSQL 方言并携带令牌"""
        url, connect_args = to_sqlalchemy_url("libsql://db.turso.io", auth_token="tok")

        assert url == "sqlite+libsql://db.turso.io?secure=true"
        assert connect_args == {"auth_token": "tok"}

    def test_plain_http_is_not_secure(self):
        """测试: http 连接不启用 TLS"""
        url, connect_args = to_sqlalchemy_url("http://127.0.0.1:8080")

        assert url == "sqlite+libsql://127.0.0.1:8080?secure=false"
        assert connect_args == {}

    @pytest.mark.parametrize("url", [None, ":memory:", "redis://cache"])
    def test_fallback_to_in_memory(self, url):
        """测试: 无可用 URL 时回退到内存存储"""
        assert isinstance(create_storage(url), InMemoryStorage)

    def test_file_url_creates_sql_storage(self, tmp_path):
        """测试: file: URL 创建 SQL 存储"""
        assert isinstance(create_storage(f"file:{tmp_path / 'x.db'}"), SQLStorage)

    @pytest.mark.asyncio
    async def test_file_url_creates_missing_directory(self, tmp_path):
        """测试: 数据库文件所在目录不存在时自动创建"""
        db_path = tmp_path / "data" / "nested" / "agent.db"

        storage = create_storage(f"file:{db_path}")
        await storage.setup()
        await storage.close()

        assert db_path.parent.is_dir()
        assert db_path.exists()


@pytest.mark.unit
class TestMemory:
    """线程记忆测试"""

    @pytest.mark.asyncio
    async def test_recall_creates_thread(self):
        """测试: 读取时自动创建线程"""
        storage = InMemoryStorage()
        memory = Memory(storage)

        history = await memory.recall(MemoryBinding(thread="t1", resource="r1"))

        assert history == []
        assert (await storage.get_thread("t1")).resource_id == "r1"

    @pytest.mark.asyncio
    async def test_recall_respects_last_messages(self):
        """测试: 只读取最近 N 条"""
        storage = InMemoryStorage()
        memory = Memory(storage, last_messages=2)
        binding = MemoryBinding(thread="t1", resource="r1")

        await memory.remember(
            binding,
            [{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}, {"role": "user", "content": "c"}],
        )
        history = await memory.recall(binding)

        assert history == [{"role": "assistant", "content": "b"}, {"role": "user", "content": "c"}]

    @pytest.mark.asyncio
    async def test_remember_updates_thread_timestamp(self):
        """测试: 写入消息后刷新线程更新时间"""
        storage = InMemoryStorage()
        memory = Memory(storage)
        binding = MemoryBinding(thread="t1", resource="r1")
        created = await memory.ensure_thread(binding)

        await memory.remember(binding, [{"role": "user", "content": "hi"}])

        assert (await storage.get_thread("t1")).updated_at >= created.updated_at
