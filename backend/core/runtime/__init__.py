"""Runtime - Agent 运行时与缓存"""

from core.runtime.cache import RuntimeCache, RuntimeFactory
from core.runtime.runtime import AgentName, AgentRuntime, GatewayFactory, create_runtime

__all__ = [
    "AgentName",
    "AgentRuntime",
    "GatewayFactory",
    "RuntimeCache",
    "RuntimeFactory",
    "create_runtime",
]
