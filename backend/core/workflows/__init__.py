"""Workflows - 多步骤工作流"""

from core.workflows.weather import WEATHER_WORKFLOW_ID, WeatherWorkflow, WeatherWorkflowState

__all__ = ["WEATHER_WORKFLOW_ID", "WeatherWorkflow", "WeatherWorkflowState"]
