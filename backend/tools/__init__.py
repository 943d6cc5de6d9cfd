"""
Tool System - 工具系统

提供 Agent 可调用的工具集合
"""

from tools.base import BaseTool, ToolParameters
from tools.registry import ToolRegistry
from tools.time_tool import CurrentTimeTool
from tools.weather import OpenMeteoClient, WeatherTool

__all__ = [
    "BaseTool",
    "CurrentTimeTool",
    "OpenMeteoClient",
    "ToolParameters",
    "ToolRegistry",
    "WeatherTool",
]
