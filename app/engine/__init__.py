"""Agent registry and assignment rules."""

from app.engine.registry import AgentRegistry
from app.engine.assignment import (
    EDUCATION_QUALITY_PLACEHOLDER,
    build_task,
    derive_priority,
    score_agent,
    select_best_agent,
)

__all__ = [
    "AgentRegistry",
    "EDUCATION_QUALITY_PLACEHOLDER",
    "build_task",
    "derive_priority",
    "score_agent",
    "select_best_agent",
]
