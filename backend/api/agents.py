"""
Agent API - Agent 调用接口
"""

from fastapi import APIRouter

from api.deps import JSONBodyDep, RuntimeCacheDep, RuntimeConfigDep, validate_payload
from api.errors import SCENE_SCRIPT_AGENT_NOT_CONFIGURED, WEATHER_AGENT_NOT_CONFIGURED
from core.runtime import AgentName
from core.types import AgentOutput, MemoryBinding
from exceptions import ConfigurationError
from schemas.agent import AgentResponse, SceneScriptRequest, WeatherRequest

router = APIRouter()

DEFAULT_SCENE_SCRIPT_RESOURCE = "scene-script"


def _to_response(output: AgentOutput) -> AgentResponse:
    return AgentResponse(text=output.text, usage=output.usage, finish_reason=output.finish_reason)


@router.post("/scene-script", response_model=AgentResponse)
async def scene_script(
    body: JSONBodyDep,
    config: RuntimeConfigDep,
    cache: RuntimeCacheDep,
) -> AgentResponse:
    """剧本速写

    传入 threadId 时绑定记忆线程，resourceId 缺省为 scene-script。
    """
    payload = validate_payload(SceneScriptRequest, body)
    runtime = await cache.get(config)
    agent = runtime.get_agent(AgentName.SCENE_SCRIPT)
    if agent is None:
        raise ConfigurationError(SCENE_SCRIPT_AGENT_NOT_CONFIGURED)

    memory = None
    if payload.thread_id:
        memory = MemoryBinding(
            thread=payload.thread_id,
            resource=payload.resource_id or DEFAULT_SCENE_SCRIPT_RESOURCE,
        )

    output = await agent.generate(payload.to_messages(), memory=memory)
    return _to_response(output)


@router.post("/weather", response_model=AgentResponse)
async def weather(
    body: JSONBodyDep,
    config: RuntimeConfigDep,
    cache: RuntimeCacheDep,
) -> AgentResponse:
    """天气助手"""
    payload = validate_payload(WeatherRequest, body)
    runtime = await cache.get(config)
    agent = runtime.get_agent(AgentName.WEATHER)
    if agent is None:
        raise ConfigurationError(WEATHER_AGENT_NOT_CONFIGURED)

    output = await agent.generate([{"role": "user", "content": payload.prompt}])
    return _to_response(output)
