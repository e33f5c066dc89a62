"""Shared fixtures: isolated service instances per test."""

from unittest.mock import AsyncMock

import pytest

from app.engine.registry import AgentRegistry
from app.services.analytics import AnalyticsService
from app.services.city_metrics import CityMetricsService
from app.services.department_agents import DepartmentAgentService
from app.services.departments import DepartmentService
from app.services.notifier import TaskNotifier


@pytest.fixture
def analytics():
    return AnalyticsService(buffer_size=100, persist=False)


@pytest.fixture
def registry():
    return AgentRegistry()


@pytest.fixture
def departments():
    return DepartmentService()


@pytest.fixture
def metrics_service():
    return CityMetricsService()


@pytest.fixture
def notifier():
    return TaskNotifier()


@pytest.fixture
def embedding_provider():
    provider = AsyncMock()
    provider.create_embedding = AsyncMock(return_value=[0.1, 0.2, 0.3])
    return provider


@pytest.fixture
def vector_index():
    index = AsyncMock()
    index.upsert = AsyncMock(return_value=1)
    return index


@pytest.fixture
def agent_service(registry, analytics, departments, metrics_service, notifier, embedding_provider, vector_index):
    return DepartmentAgentService(
        registry=registry,
        analytics=analytics,
        departments=departments,
        metrics=metrics_service,
        notifier=notifier,
        embedding_provider=embedding_provider,
        vector_index=vector_index,
    )
