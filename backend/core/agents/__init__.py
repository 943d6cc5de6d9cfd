"""Agents - LLM Agent 及其构建"""

from core.agents.base import DEFAULT_MAX_STEPS, Agent, normalize_content, normalize_message
from core.agents.factory import create_scene_script_agent, create_weather_agent

__all__ = [
    "DEFAULT_MAX_STEPS",
    "Agent",
    "create_scene_script_agent",
    "create_weather_agent",
    "normalize_content",
    "normalize_message",
]
