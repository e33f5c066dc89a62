"""Observability endpoints for health checks and debugging."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import (
    get_analytics_service,
    get_department_agent_service,
    get_metrics_service,
)
from app.schemas.metrics import CityMetrics
from app.services.analytics import AnalyticsService
from app.services.city_metrics import CityMetricsService
from app.services.department_agents import DepartmentAgentService

router = APIRouter()


@router.get("/health")
async def health_check(
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "smartcity-agents",
        "version": "0.1.0",
        "registered_agents": len(service.registry),
        "available_agents": len(service.registry.available()),
    }


@router.get("/metrics/city", response_model=CityMetrics)
async def get_city_metrics(
    metrics: CityMetricsService = Depends(get_metrics_service),
):
    """Latest city metrics snapshot, including values derived from assignments."""
    return metrics.get_metrics()


@router.get("/analytics/events")
async def list_analytics_events(
    name: Optional[str] = Query(None, description="Filter by event name"),
    limit: int = Query(100, ge=1, le=1000),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Recent telemetry events held in memory."""
    events = analytics.get_events(name=name, limit=limit)
    return {"events": events, "count": len(events)}
