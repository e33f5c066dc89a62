"""Pydantic schemas for API validation."""

from app.schemas.agent import (
    Agent,
    AgentSchedule,
    AgentTaskUpdate,
    CitizenNeed,
    DepartmentAgent,
    HealthUpdateRequest,
    HealthUpdateResponse,
    NeedResponse,
    PerformanceRecord,
    RegisterAgentResponse,
    Task,
    TaskPriority,
)
from app.schemas.metrics import (
    CityMetrics,
    CityMetricsUpdate,
    EnvironmentalMetrics,
    SocialMetrics,
)

__all__ = [
    "Agent",
    "AgentSchedule",
    "AgentTaskUpdate",
    "CitizenNeed",
    "DepartmentAgent",
    "HealthUpdateRequest",
    "HealthUpdateResponse",
    "NeedResponse",
    "PerformanceRecord",
    "RegisterAgentResponse",
    "Task",
    "TaskPriority",
    "CityMetrics",
    "CityMetricsUpdate",
    "EnvironmentalMetrics",
    "SocialMetrics",
]
