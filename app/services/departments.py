"""Department directory.

Keeps each department's roster and tells listeners (the department agent
service) when agents are assigned or their health is refreshed. Listeners
are called directly, in subscription order, and awaited.
"""

import logging
from typing import Protocol

from app.schemas.agent import DepartmentAgent

logger = logging.getLogger(__name__)


class DepartmentListener(Protocol):
    async def on_agent_assigned(self, department_id: str, agent: DepartmentAgent) -> None: ...

    async def on_agents_health_updated(self, department_id: str, agents: list[DepartmentAgent]) -> int: ...


class DepartmentService:
    """In-memory department rosters."""

    def __init__(self) -> None:
        self._rosters: dict[str, dict[str, DepartmentAgent]] = {}
        self._listeners: list[DepartmentListener] = []

    def subscribe(self, listener: DepartmentListener) -> None:
        self._listeners.append(listener)

    async def assign_agent(self, department_id: str, agent: DepartmentAgent) -> DepartmentAgent:
        """Add an agent to a department and announce it."""
        if agent.department is None:
            agent.department = department_id
        self._rosters.setdefault(department_id, {})[agent.id] = agent
        logger.info(f"[DEPT] {department_id} ← agent {agent.id} ({agent.role})")

        for listener in self._listeners:
            await listener.on_agent_assigned(department_id, agent)
        return agent

    async def update_agents_health(self, department_id: str, agents: list[DepartmentAgent]) -> int:
        """
        Refresh roster entries and announce the batch.

        Returns the number of agents the listeners reported as updated
        (the largest count, when there are several listeners).
        """
        roster = self._rosters.setdefault(department_id, {})
        for agent in agents:
            roster[agent.id] = agent

        updated = 0
        for listener in self._listeners:
            updated = max(updated, await listener.on_agents_health_updated(department_id, agents))
        logger.info(f"[DEPT] {department_id} health update | received={len(agents)} | updated={updated}")
        return updated

    async def get_department_agents(self, department_id: str) -> list[DepartmentAgent]:
        return list(self._rosters.get(department_id, {}).values())

    def list_departments(self) -> list[str]:
        return list(self._rosters.keys())
