"""
API Dependencies - API 依赖注入

提供 FastAPI 路由的依赖注入：配置、环境绑定、运行时缓存与请求体。
运行时本身在请求体验证通过后才由路由获取。
"""

import json
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from api.errors import INVALID_JSON
from app.config import EnvBindings, Settings, get_settings
from core.config import RuntimeConfig, build_runtime_config
from core.runtime import RuntimeCache
from exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_env_bindings() -> EnvBindings:
    """每个请求重新读取环境绑定"""
    return EnvBindings()


def get_runtime_config(
    bindings: Annotated[EnvBindings, Depends(get_env_bindings)],
) -> RuntimeConfig:
    return build_runtime_config(bindings)


def get_runtime_cache(request: Request) -> RuntimeCache:
    """应用级运行时缓存（保存在 app.state 上）"""
    return request.app.state.runtime_cache


async def get_json_body(request: Request) -> Any:
    """按 JSON 解析请求体，不看 Content-Type

    空请求体与无法解析的内容都视为格式错误。
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(INVALID_JSON, code="INVALID_JSON") from e


def validate_payload(model: type[ModelT], data: Any) -> ModelT:
    """校验请求体，失败时转换为 RequestValidationError（400 + issues）"""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


SettingsDep = Annotated[Settings, Depends(get_settings)]
RuntimeConfigDep = Annotated[RuntimeConfig, Depends(get_runtime_config)]
RuntimeCacheDep = Annotated[RuntimeCache, Depends(get_runtime_cache)]
JSONBodyDep = Annotated[Any, Depends(get_json_body)]
