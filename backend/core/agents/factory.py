"""
Agent Factory - 构建具名 Agent
"""

from app.config import Settings
from core.agents.base import Agent
from core.agents.prompts import SCENE_SCRIPT_AGENT_INSTRUCTIONS, WEATHER_AGENT_INSTRUCTIONS
from core.llm.gateway import LLMGateway
from core.memory.memory import Memory
from core.memory.storage import MemoryStorage
from core.scorers import (
    CompletenessScorer,
    ScorerBinding,
    ToolCallAccuracyScorer,
    TranslationScorer,
)
from tools.registry import ToolRegistry
from tools.time_tool import CurrentTimeTool
from tools.weather import OpenMeteoClient, WeatherTool


def create_weather_agent(
    gateway: LLMGateway,
    storage: MemoryStorage,
    weather_client: OpenMeteoClient,
    settings: Settings,
) -> Agent:
    """天气助手：weatherTool + 三个评分器"""
    rate = settings.scorer_sampling_rate
    return Agent(
        name="Weather Agent",
        instructions=WEATHER_AGENT_INSTRUCTIONS,
        gateway=gateway,
        tools=ToolRegistry([WeatherTool(weather_client)]),
        memory=Memory(storage, last_messages=settings.memory_last_messages),
        scorers={
            "toolCallAppropriateness": ScorerBinding(
                ToolCallAccuracyScorer(expected_tool=WeatherTool.name), rate
            ),
            "completeness": ScorerBinding(CompletenessScorer(), rate),
            "translation": ScorerBinding(TranslationScorer(gateway), rate),
        },
        score_storage=storage,
        max_steps=settings.agent_max_steps,
    )


def create_scene_script_agent(
    gateway: LLMGateway,
    storage: MemoryStorage,
    settings: Settings,
) -> Agent:
    """剧本速写 Agent：currentTimeTool"""
    return Agent(
        name="Scene Script Agent",
        instructions=SCENE_SCRIPT_AGENT_INSTRUCTIONS,
        gateway=gateway,
        tools=ToolRegistry([CurrentTimeTool()]),
        memory=Memory(storage, last_messages=settings.memory_last_messages),
        max_steps=settings.agent_max_steps,
    )
