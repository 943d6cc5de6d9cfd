"""
API Router - 路由汇总
"""

from fastapi import APIRouter

from api import agents, system

api_router = APIRouter()

# 系统接口
api_router.include_router(system.router, tags=["System"])

# Agent 调用
api_router.include_router(agents.router, prefix="/api", tags=["Agents"])
