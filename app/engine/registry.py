"""In-memory agent registry.

Holds the runtime state of every department agent known to this process.
Nothing is persisted; a restart starts empty and the department directory
repopulates it.

The registry owns an asyncio.Lock. Callers that read-filter-then-mutate
(assignment) or bulk-replace (health updates) must hold it so the two
never interleave.
"""

import asyncio
from typing import Iterable, Optional

from app.schemas.agent import DepartmentAgent


class AgentRegistry:
    """Agent id -> DepartmentAgent, in insertion order."""

    def __init__(self) -> None:
        self._agents: dict[str, DepartmentAgent] = {}
        self.lock = asyncio.Lock()

    def upsert(self, agent: DepartmentAgent) -> None:
        """Insert or replace an agent's state."""
        self._agents[agent.id] = agent

    def apply_health_update(self, agents: Iterable[DepartmentAgent]) -> int:
        """Replace state for known agents only. Returns how many were replaced."""
        updated = 0
        for agent in agents:
            if agent.id in self._agents:
                self._agents[agent.id] = agent
                updated += 1
        return updated

    def get(self, agent_id: str) -> Optional[DepartmentAgent]:
        return self._agents.get(agent_id)

    def available(self) -> list[DepartmentAgent]:
        """Agents on shift with no current task."""
        return [a for a in self._agents.values() if a.is_idle]

    def all(self) -> list[DepartmentAgent]:
        return list(self._agents.values())

    def clear(self) -> None:
        self._agents.clear()

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents
