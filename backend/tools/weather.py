"""
Weather Tools - 天气工具

基于 Open-Meteo（免费、无需 API Key）：
- 地理编码：城市名 -> 经纬度
- 当前天气：供 weatherTool 使用
- 小时预报汇总：供天气工作流使用
"""

from datetime import UTC, datetime
import json
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from core.types import ToolResult
from exceptions import ExternalServiceError, LocationNotFoundError, ToolExecutionError
from tools.base import BaseTool, ToolParameters
from utils.logging import get_logger

logger = get_logger(__name__)

# WMO 天气代码 -> 描述
WEATHER_CONDITIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def get_weather_condition(code: int | None) -> str:
    """WMO 代码转描述，未知代码返回 Unknown"""
    if code is None:
        return "Unknown"
    return WEATHER_CONDITIONS.get(int(code), "Unknown")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GeoLocation(_CamelModel):
    """地理编码结果"""

    name: str
    latitude: float
    longitude: float


class CurrentWeather(_CamelModel):
    """当前天气"""

    temperature: float
    feels_like: float = Field(alias="feelsLike")
    humidity: float
    wind_speed: float = Field(alias="windSpeed")
    wind_gust: float = Field(alias="windGust")
    conditions: str
    location: str


class Forecast(_CamelModel):
    """预报汇总"""

    date: str
    max_temp: float = Field(alias="maxTemp")
    min_temp: float = Field(alias="minTemp")
    precipitation_chance: float = Field(alias="precipitationChance")
    condition: str
    location: str


class OpenMeteoClient:
    """Open-Meteo HTTP 客户端"""

    SERVICE_NAME = "open-meteo"

    def __init__(
        self,
        geocoding_url: str,
        forecast_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                self.SERVICE_NAME,
                message=f"Open-Meteo request failed: {e}",
                original_error=e,
            ) from e

    async def geocode(self, name: str) -> GeoLocation:
        """城市名 -> 第一个匹配的地点"""
        data = await self._get_json(self.geocoding_url, {"name": name, "count": 1})
        results = data.get("results") or []
        if not results:
            raise LocationNotFoundError(name)
        first = results[0]
        return GeoLocation(
            name=first["name"],
            latitude=first["latitude"],
            longitude=first["longitude"],
        )

    async def get_current_weather(self, location: str) -> CurrentWeather:
        """获取当前天气"""
        geo = await self.geocode(location)
        data = await self._get_json(
            self.forecast_url,
            {
                "latitude": geo.latitude,
                "longitude": geo.longitude,
                "current": "temperature_2m,apparent_temperature,relative_humidity_2m,"
                "wind_speed_10m,wind_gusts_10m,weather_code",
            },
        )
        current = data["current"]
        return CurrentWeather(
            temperature=current["temperature_2m"],
            feels_like=current["apparent_temperature"],
            humidity=current["relative_humidity_2m"],
            wind_speed=current["wind_speed_10m"],
            wind_gust=current["wind_gusts_10m"],
            conditions=get_weather_condition(current.get("weather_code")),
            location=geo.name,
        )

    async def get_forecast(self, city: str) -> Forecast:
        """获取小时预报并汇总为最高/最低温度与最大降水概率"""
        geo = await self.geocode(city)
        data = await self._get_json(
            self.forecast_url,
            {
                "latitude": geo.latitude,
                "longitude": geo.longitude,
                "current": "precipitation,weathercode",
                "timezone": "auto",
                "hourly": "precipitation_probability,temperature_2m",
            },
        )
        hourly = data["hourly"]
        temperatures = [t for t in hourly.get("temperature_2m", []) if t is not None]
        probabilities = [p for p in hourly.get("precipitation_probability", []) if p is not None]
        if not temperatures:
            raise ExternalServiceError(self.SERVICE_NAME, message="Forecast has no temperature data")

        return Forecast(
            date=datetime.now(UTC).isoformat(),
            max_temp=max(temperatures),
            min_temp=min(temperatures),
            precipitation_chance=max(probabilities, default=0),
            condition=get_weather_condition(data.get("current", {}).get("weathercode")),
            location=geo.name,
        )

    async def aclose(self) -> None:
        await self._client.aclose()


class WeatherParams(ToolParameters):
    """天气工具参数"""

    location: str = Field(description="City name")


class WeatherTool(BaseTool):
    """当前天气工具"""

    name = "weatherTool"
    description = "Get current weather for a location"
    parameters_model = WeatherParams

    def __init__(self, client: OpenMeteoClient) -> None:
        self.client = client

    async def execute(self, **kwargs: Any) -> ToolResult:
        params = WeatherParams(**kwargs)
        try:
            weather = await self.client.get_current_weather(params.location)
        except (LocationNotFoundError, ExternalServiceError) as e:
            raise ToolExecutionError(self.name, e.message, original_error=e) from e

        return ToolResult(
            tool_call_id="",
            success=True,
            output=json.dumps(weather.model_dump(by_alias=True), ensure_ascii=False),
        )
