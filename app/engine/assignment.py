"""Agent scoring and task priority rules."""

from typing import Optional, Sequence

from app.schemas.agent import CitizenNeed, DepartmentAgent, PerformanceRecord, Task, TaskPriority


# Selection score weights
RESPONSE_TIME_WEIGHT = 0.4
RESOLUTION_RATE_WEIGHT = 0.4
EFFICIENCY_WEIGHT = 0.2

# Urgency thresholds (strict >)
HIGH_PRIORITY_URGENCY = 0.7
MEDIUM_PRIORITY_URGENCY = 0.3

CITIZEN_REQUEST_TASK = "citizen_request"

# Placeholder: not derived from the need or the agent yet
EDUCATION_QUALITY_PLACEHOLDER = 0.8


def score_agent(performance: PerformanceRecord) -> float:
    """Weighted average of the agent's performance scalars."""
    return (
        performance.response_time * RESPONSE_TIME_WEIGHT
        + performance.resolution_rate * RESOLUTION_RATE_WEIGHT
        + performance.efficiency * EFFICIENCY_WEIGHT
    )


def select_best_agent(agents: Sequence[DepartmentAgent]) -> Optional[DepartmentAgent]:
    """
    Return the highest scoring agent, or None for an empty sequence.

    Ties go to the agent seen first. This is arbitrary, but callers rely
    on it being stable, so keep the strict comparison.
    """
    best: Optional[DepartmentAgent] = None
    best_score = 0.0
    for agent in agents:
        score = score_agent(agent.performance)
        if best is None or score > best_score:
            best, best_score = agent, score
    return best


def derive_priority(urgency: float) -> TaskPriority:
    if urgency > HIGH_PRIORITY_URGENCY:
        return "high"
    if urgency > MEDIUM_PRIORITY_URGENCY:
        return "medium"
    return "low"


def build_task(need: CitizenNeed) -> Task:
    """Create the task record for a citizen need."""
    return Task(
        type=CITIZEN_REQUEST_TASK,
        description=need.description,
        priority=derive_priority(need.urgency),
    )
