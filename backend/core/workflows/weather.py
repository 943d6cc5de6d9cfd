"""
Weather Workflow - 天气活动规划工作流

基于 LangGraph StateGraph：
START → fetch_weather → plan_activities → END
"""

from collections.abc import Callable
import json
from typing import Any, TypedDict

from langgraph.graph import END, START, StateGraph

from core.agents.base import Agent
from core.agents.prompts import ACTIVITY_PLAN_TEMPLATE
from core.types import MessageRole
from exceptions import ConfigurationError
from tools.weather import OpenMeteoClient
from utils.logging import get_logger

logger = get_logger(__name__)

WEATHER_WORKFLOW_ID = "weatherWorkflow"


class WeatherWorkflowState(TypedDict, total=False):
    """工作流状态"""

    city: str
    forecast: dict[str, Any]
    activities: str


class WeatherWorkflow:
    """
    天气工作流

    fetch_weather 从 Open-Meteo 获取预报，plan_activities 交给 weatherAgent 生成活动建议。
    """

    id = WEATHER_WORKFLOW_ID

    def __init__(
        self,
        client: OpenMeteoClient,
        agent_lookup: Callable[[], Agent | None],
    ) -> None:
        self.client = client
        self.agent_lookup = agent_lookup
        self.graph = self._build_graph()

    def _build_graph(self) -> Any:
        builder = StateGraph(WeatherWorkflowState)

        builder.add_node("fetch_weather", self._fetch_weather)
        builder.add_node("plan_activities", self._plan_activities)

        builder.add_edge(START, "fetch_weather")
        builder.add_edge("fetch_weather", "plan_activities")
        builder.add_edge("plan_activities", END)

        return builder.compile()

    async def _fetch_weather(self, state: WeatherWorkflowState) -> dict[str, Any]:
        forecast = await self.client.get_forecast(state["city"])
        logger.debug("Fetched forecast for %s", forecast.location)
        return {"forecast": forecast.model_dump(by_alias=True)}

    async def _plan_activities(self, state: WeatherWorkflowState) -> dict[str, Any]:
        forecast = state.get("forecast")
        if not forecast:
            raise ConfigurationError("Forecast data not found")

        agent = self.agent_lookup()
        if agent is None:
            raise ConfigurationError("Weather agent not found")

        prompt = ACTIVITY_PLAN_TEMPLATE.format(
            location=forecast["location"],
            forecast_json=json.dumps(forecast, indent=2, ensure_ascii=False),
        )
        output = await agent.generate([{"role": MessageRole.USER.value, "content": prompt}])
        return {"activities": output.text}

    async def run(self, city: str) -> dict[str, str]:
        """执行工作流，返回 {"activities": ...}"""
        result = await self.graph.ainvoke({"city": city})
        return {"activities": result["activities"]}
