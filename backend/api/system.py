"""
System API - 系统接口
"""

from fastapi import APIRouter
from pydantic import BaseModel

from api.deps import SettingsDep

router = APIRouter()


class HealthResponse(BaseModel):
    """健康检查响应"""

    ok: bool
    message: str


@router.get("/", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """健康检查"""
    return HealthResponse(ok=True, message=settings.health_message)
