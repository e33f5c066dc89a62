"""Demo department agents for local development."""

from app.schemas.agent import AgentSchedule, DepartmentAgent, PerformanceRecord
from app.services.departments import DepartmentService


def get_demo_agents() -> dict[str, list[DepartmentAgent]]:
    """
    Demo rosters keyed by department id.

    Performance values are synthetic but spread out enough that the
    assignment order is easy to follow in the logs.
    """
    return {
        "public_works": [
            DepartmentAgent(
                id="pw-001",
                name="Maria Alvarez",
                role="Road Maintenance Lead",
                personality="methodical and calm",
                interests=["potholes", "street lighting", "drainage"],
                traits={"patience": 0.8, "thoroughness": 0.9},
                department="public_works",
                schedule=AgentSchedule(availability=True, shift="morning"),
                performance=PerformanceRecord(
                    response_time=0.85,
                    resolution_rate=0.9,
                    efficiency=0.8,
                    citizen_satisfaction=0.88,
                ),
            ),
            DepartmentAgent(
                id="pw-002",
                name="Dev Patel",
                role="Sanitation Coordinator",
                personality="energetic and direct",
                interests=["waste collection", "recycling"],
                traits={"patience": 0.6, "thoroughness": 0.7},
                department="public_works",
                schedule=AgentSchedule(availability=True, shift="evening"),
                performance=PerformanceRecord(
                    response_time=0.7,
                    resolution_rate=0.75,
                    efficiency=0.9,
                    citizen_satisfaction=0.72,
                ),
            ),
        ],
        "health": [
            DepartmentAgent(
                id="hl-001",
                name="Sam Okafor",
                role="Community Health Worker",
                personality="empathetic listener",
                interests=["clinics", "elder care", "vaccination"],
                traits={"empathy": 0.95},
                department="health",
                schedule=AgentSchedule(availability=True, shift="morning"),
                performance=PerformanceRecord(
                    response_time=0.65,
                    resolution_rate=0.8,
                    efficiency=0.7,
                    citizen_satisfaction=0.93,
                ),
            ),
        ],
    }


async def seed_demo_agents(departments: DepartmentService) -> int:
    """Assign every demo agent to its department. Returns the count."""
    count = 0
    for department_id, agents in get_demo_agents().items():
        for agent in agents:
            await departments.assign_agent(department_id, agent)
            count += 1
    return count
