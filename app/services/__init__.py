"""Department agent services and external integrations."""

from app.services.analytics import AnalyticsService
from app.services.city_metrics import CityMetricsService
from app.services.department_agents import DepartmentAgentService, EnrollmentError
from app.services.departments import DepartmentService
from app.services.notifier import TaskNotifier, TASK_ASSIGNED
from app.services.together_client import TogetherClient, TogetherError
from app.services.vector_store import VectorStoreClient, VectorStoreError

__all__ = [
    "AnalyticsService",
    "CityMetricsService",
    "DepartmentAgentService",
    "EnrollmentError",
    "DepartmentService",
    "TaskNotifier",
    "TASK_ASSIGNED",
    "TogetherClient",
    "TogetherError",
    "VectorStoreClient",
    "VectorStoreError",
]
