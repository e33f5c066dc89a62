"""Pydantic schemas for department agents, citizen needs and tasks."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


TaskPriority = Literal["high", "medium", "low"]


# =============================================================================
# Agent Components
# =============================================================================

class PerformanceRecord(BaseModel):
    """Normalized performance scalars, maintained by the department directory."""

    response_time: float = Field(default=0.5, ge=0.0, le=1.0, description="Normalized response time score")
    resolution_rate: float = Field(default=0.5, ge=0.0, le=1.0, description="Share of requests resolved")
    efficiency: float = Field(default=0.5, ge=0.0, le=1.0)
    citizen_satisfaction: float = Field(default=0.5, ge=0.0, le=1.0)


class AgentSchedule(BaseModel):
    """Agent availability."""

    availability: bool = Field(default=True, description="Whether the agent is on shift")
    shift: Optional[str] = Field(None, description="Shift label, e.g. 'morning'")


class Task(BaseModel):
    """A task held by a single agent until resolved."""

    type: str = Field(..., description="Task type tag")
    description: str = Field(default="")
    priority: TaskPriority


# =============================================================================
# Agents
# =============================================================================

class Agent(BaseModel):
    """Attributes used to enroll an agent into the vector index."""

    id: str = Field(..., min_length=1)
    name: str
    role: str
    personality: str = ""
    interests: list[str] = Field(default_factory=list)
    traits: dict[str, Any] = Field(default_factory=dict)
    department: Optional[str] = Field(None, description="Department id; 'general' when absent")


class DepartmentAgent(Agent):
    """Runtime state of an agent held by the registry."""

    schedule: AgentSchedule = Field(default_factory=AgentSchedule)
    performance: PerformanceRecord = Field(default_factory=PerformanceRecord)
    current_task: Optional[Task] = None

    @property
    def is_idle(self) -> bool:
        """Eligible for a new assignment."""
        return self.schedule.availability and self.current_task is None


# =============================================================================
# Request/Response Schemas
# =============================================================================

class CitizenNeed(BaseModel):
    """An incoming request for municipal service."""

    type: str = Field(..., description="Need type tag, e.g. 'pothole'")
    description: str = Field(default="")
    urgency: float = Field(..., ge=0.0, le=1.0, description="Urgency (0-1)")


class AgentTaskUpdate(BaseModel):
    """An agent paired with its current task."""

    agent_id: str
    task: Task


class NeedResponse(BaseModel):
    """Result of handling a citizen need."""

    assigned: bool
    assignment: Optional[AgentTaskUpdate] = None


class HealthUpdateRequest(BaseModel):
    """Batch of refreshed agent states for one department."""

    agents: list[DepartmentAgent] = Field(default_factory=list)


class HealthUpdateResponse(BaseModel):
    department_id: str
    updated: int = Field(..., description="Agents already in the registry that were refreshed")


class RegisterAgentResponse(BaseModel):
    vector_id: str
    department: str
