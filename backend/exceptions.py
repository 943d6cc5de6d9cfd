"""
Exceptions - 自定义异常类

提供统一的异常层次结构，便于错误处理和 API 响应。
"""

from typing import Any


class AgentWorkerError(Exception):
    """Agent Worker 基础异常

    message 会直接作为 HTTP 错误响应的 error 字段返回给客户端，
    code 与 details 只用于日志。
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(AgentWorkerError):
    """业务层输入错误（请求体校验之外），映射为 400"""

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NotFoundError(AgentWorkerError):
    """资源不存在"""

    def __init__(
        self,
        resource: str,
        resource_id: str | None = None,
        code: str = "NOT_FOUND",
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} not found: {resource_id}"
        super().__init__(message, code, {"resource": resource, "id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class LocationNotFoundError(NotFoundError):
    """地理编码未找到地点"""

    def __init__(self, location: str) -> None:
        super().__init__("Location", location, code="LOCATION_NOT_FOUND")
        self.message = f"Location '{location}' not found"


class ConfigurationError(AgentWorkerError):
    """配置错误

    运行时构建完成后，所需的 Agent 或工作流缺失时抛出。
    """

    def __init__(
        self,
        message: str = "Runtime is not configured",
        code: str = "CONFIGURATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ExternalServiceError(AgentWorkerError):
    """外部服务错误

    当调用外部服务（LLM、天气 API、持久化后端）失败时抛出。
    """

    def __init__(
        self,
        service: str,
        message: str | None = None,
        code: str = "EXTERNAL_SERVICE_ERROR",
        original_error: Exception | None = None,
    ) -> None:
        msg = message or f"External service error: {service}"
        super().__init__(msg, code, {"service": service})
        self.service = service
        self.original_error = original_error


class ToolExecutionError(AgentWorkerError):
    """工具执行错误"""

    def __init__(
        self,
        tool_name: str,
        message: str | None = None,
        code: str = "TOOL_EXECUTION_ERROR",
        original_error: Exception | None = None,
    ) -> None:
        msg = message or f"Tool execution failed: {tool_name}"
        super().__init__(msg, code, {"tool": tool_name})
        self.tool_name = tool_name
        self.original_error = original_error
