"""
Current Time Tool 单元测试
"""

from datetime import UTC, datetime
import json

import pytest

from tools.time_tool import CurrentTimeTool, get_time_of_day

FIXED_NOW = datetime(2024, 3, 15, 6, 30, tzinfo=UTC)


@pytest.fixture
def tool():
    return CurrentTimeTool(clock=lambda: FIXED_NOW)


@pytest.mark.unit
class TestCurrentTimeTool:
    """当前时间工具测试"""

    def test_chinese_locale_with_timezone(self, tool):
        """测试: 默认中文，按时区换算"""
        info = tool.describe(timezone="Asia/Shanghai")

        assert info == {
            "iso": "2024-03-15T06:30:00Z",
            "localeString": "2024年3月15日星期五 14:30:00",
            "weekday": "星期五",
            "date": "2024-03-15",
            "hour": 14,
            "timeOfDay": "下午",
        }

    def test_english_locale(self, tool):
        """测试: 英文格式"""
        info = tool.describe(locale="en-US", timezone="UTC")

        assert info["localeString"] == "Friday, March 15, 2024 at 06:30:00"
        assert info["weekday"] == "Friday"
        assert info["timeOfDay"] == "清晨"

    def test_invalid_timezone_falls_back(self, tool):
        """测试: 无效时区回退到 Asia/Shanghai"""
        info = tool.describe(timezone="Mars/Olympus")

        assert info["hour"] == 14

    @pytest.mark.asyncio
    async def test_execute_returns_json(self, tool):
        """测试: execute 输出 JSON 文本"""
        result = await tool.execute(timezone="Asia/Tokyo")

        assert result.success is True
        payload = json.loads(result.output)
        assert payload["hour"] == 15
        assert payload["iso"] == "2024-03-15T06:30:00Z"

    @pytest.mark.parametrize(
        ("hour", "expected"),
        [
            (0, "深夜"),
            (4, "深夜"),
            (5, "清晨"),
            (8, "上午"),
            (12, "中午"),
            (14, "下午"),
            (18, "傍晚"),
            (21, "夜晚"),
            (23, "夜晚"),
        ],
    )
    def test_time_of_day(self, hour, expected):
        """测试: 时间段划分"""
        assert get_time_of_day(hour) == expected
