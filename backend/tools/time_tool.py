"""
Current Time Tool - 当前时间工具

获取当前时间的结构化信息，用于创作内容时贴合真实时间氛围。
"""

from collections.abc import Callable
from datetime import UTC, datetime
import json
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field

from core.types import ToolResult
from tools.base import BaseTool, ToolParameters

DEFAULT_LOCALE = "zh-CN"
FALLBACK_TIMEZONE = "Asia/Shanghai"

_ZH_WEEKDAYS = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")
_EN_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_EN_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def get_time_of_day(hour: int) -> str:
    """小时 -> 时间段"""
    if hour < 5:
        return "深夜"
    if hour < 8:
        return "清晨"
    if hour < 12:
        return "上午"
    if hour < 14:
        return "中午"
    if hour < 18:
        return "下午"
    if hour < 21:
        return "傍晚"
    return "夜晚"


def _is_chinese(locale: str) -> bool:
    return locale.lower().startswith("zh")


def format_weekday(moment: datetime, locale: str) -> str:
    names = _ZH_WEEKDAYS if _is_chinese(locale) else _EN_WEEKDAYS
    return names[moment.weekday()]


def format_locale_string(moment: datetime, locale: str) -> str:
    """按 locale 格式化完整的日期时间"""
    weekday = format_weekday(moment, locale)
    clock = moment.strftime("%H:%M:%S")
    if _is_chinese(locale):
        return f"{moment.year}年{moment.month}月{moment.day}日{weekday} {clock}"
    month = _EN_MONTHS[moment.month - 1]
    return f"{weekday}, {month} {moment.day}, {moment.year} at {clock}"


def resolve_timezone(name: str | None) -> ZoneInfo | None:
    """解析 IANA 时区；未提供时返回 None（使用系统时区），无效时回退到 Asia/Shanghai"""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(FALLBACK_TIMEZONE)


class CurrentTimeParams(ToolParameters):
    """当前时间工具参数"""

    locale: str | None = Field(default=None, description="可选，格式化时间时使用的 locale，默认为 zh-CN")
    timezone: str | None = Field(
        default=None,
        description="可选，IANA 时区 ID（例如 Asia/Shanghai）；未提供或无效时回退到系统默认值",
    )


class CurrentTimeTool(BaseTool):
    """当前时间工具"""

    name = "currentTimeTool"
    description = "获取当前时间的结构化信息，用于创作内容时贴合真实时间氛围。"
    parameters_model = CurrentTimeParams

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))

    def describe(self, locale: str | None = None, timezone: str | None = None) -> dict[str, Any]:
        """返回结构化的当前时间信息"""
        locale = locale or DEFAULT_LOCALE
        now = self._clock()
        tz = resolve_timezone(timezone)
        local = now.astimezone(tz) if tz else now.astimezone()

        return {
            "iso": now.astimezone(UTC).isoformat().replace("+00:00", "Z"),
            "localeString": format_locale_string(local, locale),
            "weekday": format_weekday(local, locale),
            "date": local.strftime("%Y-%m-%d"),
            "hour": local.hour,
            "timeOfDay": get_time_of_day(local.hour),
        }

    async def execute(self, **kwargs: Any) -> ToolResult:
        params = CurrentTimeParams(**kwargs)
        info = self.describe(locale=params.locale, timezone=params.timezone)
        return ToolResult(
            tool_call_id="",
            success=True,
            output=json.dumps(info, ensure_ascii=False),
        )
