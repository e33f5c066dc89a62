"""Department agent endpoints: enrollment, rosters, citizen needs."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_department_agent_service, get_department_service
from app.schemas.agent import (
    Agent,
    AgentTaskUpdate,
    CitizenNeed,
    DepartmentAgent,
    HealthUpdateRequest,
    HealthUpdateResponse,
    NeedResponse,
    RegisterAgentResponse,
)
from app.services.department_agents import (
    DEFAULT_DEPARTMENT,
    DepartmentAgentService,
    EnrollmentError,
)
from app.services.departments import DepartmentService

router = APIRouter()


@router.post("/agents/register", response_model=RegisterAgentResponse, status_code=status.HTTP_201_CREATED)
async def register_agent(
    agent: Agent,
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """Enroll an agent into the vector index for similarity lookup."""
    try:
        vector_id = await service.register_agent(agent)
    except EnrollmentError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )
    return RegisterAgentResponse(
        vector_id=vector_id,
        department=agent.department or DEFAULT_DEPARTMENT,
    )


@router.get("/agents/{agent_id}", response_model=DepartmentAgent)
async def get_agent(
    agent_id: str,
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """Current registry state of an agent."""
    agent = service.registry.get(agent_id)
    if agent is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent {agent_id} not found",
        )
    return agent


@router.post(
    "/departments/{department_id}/agents",
    response_model=DepartmentAgent,
    status_code=status.HTTP_201_CREATED,
)
async def assign_department_agent(
    department_id: str,
    agent: DepartmentAgent,
    departments: DepartmentService = Depends(get_department_service),
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """Add an agent to a department; it becomes eligible for assignment."""
    # service dependency makes sure the agent service is subscribed
    return await departments.assign_agent(department_id, agent)


@router.post("/departments/{department_id}/agents/health", response_model=HealthUpdateResponse)
async def update_agents_health(
    department_id: str,
    request: HealthUpdateRequest,
    departments: DepartmentService = Depends(get_department_service),
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """Refresh state of already-registered agents. Unknown ids are ignored."""
    updated = await departments.update_agents_health(department_id, request.agents)
    return HealthUpdateResponse(department_id=department_id, updated=updated)


@router.get("/departments/{department_id}/tasks", response_model=list[AgentTaskUpdate])
async def get_department_tasks(
    department_id: str,
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """Agents of a department that currently hold a task."""
    return await service.get_agent_tasks(department_id)


@router.post("/needs", response_model=NeedResponse)
async def submit_citizen_need(
    need: CitizenNeed,
    service: DepartmentAgentService = Depends(get_department_agent_service),
):
    """
    Assign a citizen need to the best idle agent.

    When nobody is available the request still succeeds with assigned=false.
    """
    assignment = await service.handle_citizen_need(need)
    return NeedResponse(assigned=assignment is not None, assignment=assignment)
