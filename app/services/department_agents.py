"""Department agent service.

Assigns idle department agents to citizen needs and enrolls agents into
the vector index for similarity lookup.

Assignment:
- Eligible = on shift and no current task
- Pick the best weighted performance score (first seen wins ties)
- Attach the task, notify taskAssigned subscribers, push social metrics

Enrollment:
- Embed "role personality interests..." via the embedding provider
- Upsert "agent-{id}" with metadata into the vector index
- Either remote call failing raises EnrollmentError; nothing is retried
"""

import json
import logging
import time
from typing import Optional, Protocol

from app.engine.assignment import (
    EDUCATION_QUALITY_PLACEHOLDER,
    build_task,
    score_agent,
    select_best_agent,
)
from app.engine.registry import AgentRegistry
from app.schemas.agent import Agent, AgentTaskUpdate, CitizenNeed, DepartmentAgent, Task
from app.schemas.metrics import CityMetricsUpdate, SocialMetrics
from app.services.analytics import AnalyticsService
from app.services.city_metrics import CityMetricsService
from app.services.departments import DepartmentService
from app.services.notifier import TASK_ASSIGNED, TaskNotifier
from app.services.together_client import TogetherClient
from app.services.vector_store import VectorStoreClient

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = "general"
AGENT_VECTOR_TYPE = "department_agent"
# Vector metadata keeps the camelCase agentId other index readers filter on


class EmbeddingProvider(Protocol):
    async def create_embedding(self, text: str) -> list[float]: ...


class VectorIndex(Protocol):
    async def upsert(self, record: dict) -> int: ...


class EnrollmentError(Exception):
    """Raised when an agent could not be enrolled into the vector index."""
    def __init__(self, agent_id: str, message: str):
        self.agent_id = agent_id
        self.message = message
        super().__init__(f"Failed to register agent {agent_id}: {message}")


def _now_ms() -> int:
    return int(time.time() * 1000)


class DepartmentAgentService:
    """Owns the agent registry on behalf of the department directory."""

    def __init__(
        self,
        registry: AgentRegistry,
        analytics: AnalyticsService,
        departments: DepartmentService,
        metrics: CityMetricsService,
        notifier: TaskNotifier,
        embedding_provider: Optional[EmbeddingProvider] = None,
        vector_index: Optional[VectorIndex] = None,
    ):
        self.registry = registry
        self.analytics = analytics
        self.departments = departments
        self.metrics = metrics
        self.notifier = notifier
        self._embedding_provider = embedding_provider
        self._vector_index = vector_index

        departments.subscribe(self)

    # -------------------------------------------------------------------------
    # Department directory callbacks
    # -------------------------------------------------------------------------

    async def on_agent_assigned(self, department_id: str, agent: DepartmentAgent) -> None:
        async with self.registry.lock:
            self.registry.upsert(agent)
        self.analytics.track_event("agent_registered", {
            "agent_id": agent.id,
            "department_id": department_id,
            "timestamp": _now_ms(),
        })

    async def on_agents_health_updated(self, department_id: str, agents: list[DepartmentAgent]) -> int:
        async with self.registry.lock:
            return self.registry.apply_health_update(agents)

    # -------------------------------------------------------------------------
    # Assignment
    # -------------------------------------------------------------------------

    async def handle_citizen_need(self, need: CitizenNeed) -> Optional[AgentTaskUpdate]:
        """
        Assign the need to the best idle agent.

        Returns the assignment, or None when no agent is available (recorded
        as a no_available_agents event, not an error).
        """
        async with self.registry.lock:
            available = self.registry.available()
            if not available:
                self.analytics.track_event("no_available_agents", {
                    "need_type": need.type,
                    "urgency": need.urgency,
                    "timestamp": _now_ms(),
                })
                logger.info(f"No available agents for need type={need.type} urgency={need.urgency}")
                return None

            agent = self._select_best_agent(available, need)
            assignment = self._assign_task(agent.id, build_task(need))

        if assignment is None:
            return None

        await self.notifier.publish(TASK_ASSIGNED, {
            "agent_id": assignment.agent_id,
            "task": assignment.task,
        })

        await self.metrics.update_metrics(CityMetricsUpdate(
            social=SocialMetrics(
                healthcare_access_score=agent.performance.efficiency,
                education_quality_index=EDUCATION_QUALITY_PLACEHOLDER,
                community_wellbeing=agent.performance.citizen_satisfaction,
            )
        ))
        return assignment

    def _select_best_agent(self, agents: list[DepartmentAgent], need: CitizenNeed) -> DepartmentAgent:
        selected = select_best_agent(agents)
        self.analytics.track_event("agent_selected", {
            "agent_id": selected.id,
            "need_type": need.type,
            "urgency": need.urgency,
            "score": score_agent(selected.performance),
            "timestamp": _now_ms(),
        })
        return selected

    def _assign_task(self, agent_id: str, task: Task) -> Optional[AgentTaskUpdate]:
        # caller holds registry.lock
        agent = self.registry.get(agent_id)
        if agent is None:
            return None

        agent.current_task = task
        self.registry.upsert(agent)

        self.analytics.track_event("task_assigned", {
            "agent_id": agent_id,
            "task_type": task.type,
            "priority": task.priority,
            "timestamp": _now_ms(),
        })
        return AgentTaskUpdate(agent_id=agent_id, task=task)

    async def get_agent_tasks(self, department_id: str) -> list[AgentTaskUpdate]:
        """Current tasks of a department's agents."""
        agents = await self.departments.get_department_agents(department_id)
        return [
            AgentTaskUpdate(agent_id=agent.id, task=agent.current_task)
            for agent in agents
            if agent.current_task is not None
        ]

    # -------------------------------------------------------------------------
    # Enrollment
    # -------------------------------------------------------------------------

    async def register_agent(self, agent: Agent) -> str:
        """Embed and upsert an agent into the vector index. Returns the vector id."""
        department = agent.department or DEFAULT_DEPARTMENT
        vector_id = f"agent-{agent.id}"
        try:
            embedding = await self._get_embedding_provider().create_embedding(
                f"{agent.role} {agent.personality} {' '.join(agent.interests)}"
            )

            await self._get_vector_index().upsert({
                "id": vector_id,
                "values": embedding,
                "metadata": {
                    "type": AGENT_VECTOR_TYPE,
                    "agentId": agent.id,
                    "role": agent.role,
                    "name": agent.name,
                    "personality": agent.personality,
                    "interests": ",".join(agent.interests),
                    "traits": json.dumps(agent.traits),
                    "department": department,
                    "timestamp": _now_ms(),
                },
            })
        except Exception as e:
            logger.error(f"✗ Failed to register agent {agent.name}: {e}")
            raise EnrollmentError(agent.id, str(e)) from e

        self.analytics.track_event("agent_registered", {
            "agent_id": agent.id,
            "role": agent.role,
            "department": department,
        })
        logger.info(f"✓ Registered department agent: {agent.name} in {department} department")
        return vector_id

    def _get_embedding_provider(self) -> EmbeddingProvider:
        if self._embedding_provider is None:
            self._embedding_provider = TogetherClient()
        return self._embedding_provider

    def _get_vector_index(self) -> VectorIndex:
        if self._vector_index is None:
            self._vector_index = VectorStoreClient()
        return self._vector_index
