"""Process-wide service instances, exposed as FastAPI dependencies.

Each getter is cached so the whole app shares one registry and one set of
collaborators. Tests swap them via app.dependency_overrides.
"""

from functools import lru_cache

from app.engine.registry import AgentRegistry
from app.services.analytics import AnalyticsService
from app.services.city_metrics import CityMetricsService
from app.services.department_agents import DepartmentAgentService
from app.services.departments import DepartmentService
from app.services.notifier import TaskNotifier


@lru_cache
def get_analytics_service() -> AnalyticsService:
    return AnalyticsService()


@lru_cache
def get_metrics_service() -> CityMetricsService:
    return CityMetricsService()


@lru_cache
def get_department_service() -> DepartmentService:
    return DepartmentService()


@lru_cache
def get_department_agent_service() -> DepartmentAgentService:
    """Build the agent service; it subscribes itself to the department directory."""
    return DepartmentAgentService(
        registry=AgentRegistry(),
        analytics=get_analytics_service(),
        departments=get_department_service(),
        metrics=get_metrics_service(),
        notifier=TaskNotifier(),
    )
