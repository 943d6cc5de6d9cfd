"""
API Error Messages - API 错误消息常量

统一管理 API 错误消息，避免重复字面量
"""

# 请求错误
INVALID_PAYLOAD = "Invalid request payload"
INVALID_JSON = "Invalid JSON body"

# 路由错误
NOT_FOUND = "Not Found"

# 配置错误
SCENE_SCRIPT_AGENT_NOT_CONFIGURED = "Scene Script agent is not configured."
WEATHER_AGENT_NOT_CONFIGURED = "Weather agent is not configured."

# 通用错误
INTERNAL_ERROR = "Internal Server Error"
