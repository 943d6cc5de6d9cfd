"""
Open-Meteo Mock 工具

基于 httpx.MockTransport 模拟地理编码与天气接口
"""

import httpx

from tools.weather import OpenMeteoClient

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# 地理编码无结果的城市
UNKNOWN_CITY = "Nowhere"

CURRENT_PAYLOAD = {
    "current": {
        "temperature_2m": 18.2,
        "apparent_temperature": 17.5,
        "relative_humidity_2m": 64,
        "wind_speed_10m": 11.3,
        "wind_gusts_10m": 24.1,
        "weather_code": 2,
    }
}

FORECAST_PAYLOAD = {
    "current": {"precipitation": 0.0, "weathercode": 61},
    "hourly": {
        "temperature_2m": [12.0, 15.5, 21.3, None, 17.8],
        "precipitation_probability": [10, 65, 40, None, 5],
    },
}


def open_meteo_handler(request: httpx.Request) -> httpx.Response:
    """UNKNOWN_CITY 无地理编码结果，其余城市解析为 Paris"""
    if request.url.host == "geocoding-api.open-meteo.com":
        if request.url.params.get("name") == UNKNOWN_CITY:
            return httpx.Response(200, json={"generationtime_ms": 0.2})
        return httpx.Response(
            200,
            json={"results": [{"name": "Paris", "latitude": 48.85, "longitude": 2.35}]},
        )
    if "hourly" in request.url.params:
        return httpx.Response(200, json=FORECAST_PAYLOAD)
    return httpx.Response(200, json=CURRENT_PAYLOAD)


def create_mock_client(handler=open_meteo_handler) -> OpenMeteoClient:
    """创建使用 MockTransport 的 Open-Meteo 客户端"""
    return OpenMeteoClient(
        geocoding_url=GEOCODING_URL,
        forecast_url=FORECAST_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
