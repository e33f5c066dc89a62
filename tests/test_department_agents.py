"""Tests for the department agent service: assignment and enrollment."""

import asyncio
import json

import pytest

from app.schemas.agent import Agent, CitizenNeed, Task
from app.services.department_agents import EnrollmentError
from app.services.notifier import TASK_ASSIGNED
from app.services.together_client import TogetherError
from app.services.vector_store import VectorStoreError
from tests.factories import make_agent


def _event_names(analytics):
    return [e["name"] for e in analytics.get_events()]


@pytest.fixture
def need():
    return CitizenNeed(type="pothole", description="Pothole on Princess St", urgency=0.8)


class TestDepartmentEvents:
    """Tests for department directory -> registry wiring."""

    @pytest.mark.asyncio
    async def test_assigned_agent_lands_in_registry(self, agent_service, departments, analytics):
        agent = make_agent("a1", score=0.6)
        await departments.assign_agent("public_works", agent)

        assert agent_service.registry.get("a1") is agent
        event = analytics.get_events(name="agent_registered")[-1]
        assert event["payload"]["agent_id"] == "a1"
        assert event["payload"]["department_id"] == "public_works"

    @pytest.mark.asyncio
    async def test_health_update_only_touches_known_agents(self, agent_service, departments):
        await departments.assign_agent("public_works", make_agent("a1", score=0.6))

        updated = await departments.update_agents_health(
            "public_works",
            [make_agent("a1", score=0.6, available=False), make_agent("ghost", score=0.9)],
        )

        assert updated == 1
        assert "ghost" not in agent_service.registry
        assert agent_service.registry.get("a1").schedule.availability is False

    @pytest.mark.asyncio
    async def test_get_agent_tasks_lists_busy_agents_only(self, agent_service, departments, need):
        await departments.assign_agent("public_works", make_agent("a1", score=0.9))
        await departments.assign_agent("public_works", make_agent("a2", score=0.5))

        await agent_service.handle_citizen_need(need)
        tasks = await agent_service.get_agent_tasks("public_works")

        assert [t.agent_id for t in tasks] == ["a1"]
        assert tasks[0].task.priority == "high"

    @pytest.mark.asyncio
    async def test_get_agent_tasks_unknown_department(self, agent_service):
        assert await agent_service.get_agent_tasks("nowhere") == []


class TestHandleCitizenNeed:
    """Tests for assignment of citizen needs."""

    @pytest.mark.asyncio
    async def test_no_eligible_agents(self, agent_service, registry, analytics, metrics_service, need):
        """Only the no_available_agents event is emitted and no task is created."""
        busy_task = Task(type="citizen_request", description="old", priority="low")
        registry.upsert(make_agent("off", score=0.9, available=False))
        registry.upsert(make_agent("busy", score=0.9, current_task=busy_task))
        received = []
        agent_service.notifier.subscribe(TASK_ASSIGNED, received.append)

        result = await agent_service.handle_citizen_need(need)

        assert result is None
        assert _event_names(analytics) == ["no_available_agents"]
        payload = analytics.get_events()[0]["payload"]
        assert payload["need_type"] == "pothole"
        assert payload["urgency"] == 0.8
        assert registry.get("off").current_task is None
        assert registry.get("busy").current_task is busy_task
        assert received == []
        assert metrics_service.get_metrics().updates_applied == 0

    @pytest.mark.asyncio
    async def test_empty_registry(self, agent_service, analytics, need):
        assert await agent_service.handle_citizen_need(need) is None
        assert _event_names(analytics) == ["no_available_agents"]

    @pytest.mark.asyncio
    async def test_single_eligible_agent_selected(self, agent_service, registry, need):
        registry.upsert(make_agent("weak", score=0.1))
        registry.upsert(make_agent("strong-but-off", score=1.0, available=False))

        result = await agent_service.handle_citizen_need(need)

        assert result.agent_id == "weak"

    @pytest.mark.asyncio
    async def test_best_score_selected_and_task_attached(self, agent_service, registry, analytics, need):
        registry.upsert(make_agent("a", score=0.5))
        registry.upsert(make_agent("b", score=0.9))

        result = await agent_service.handle_citizen_need(need)

        assert result.agent_id == "b"
        assert registry.get("b").current_task == result.task
        assert registry.get("a").current_task is None
        assert result.task.type == "citizen_request"
        assert result.task.description == "Pothole on Princess St"
        assert result.task.priority == "high"
        assert _event_names(analytics) == ["agent_selected", "task_assigned"]

        selected = analytics.get_events(name="agent_selected")[0]["payload"]
        assert selected["score"] == pytest.approx(0.9)
        assigned = analytics.get_events(name="task_assigned")[0]["payload"]
        assert assigned == {
            "agent_id": "b",
            "task_type": "citizen_request",
            "priority": "high",
            "timestamp": assigned["timestamp"],
        }

    @pytest.mark.asyncio
    async def test_equal_scores_first_registered_wins(self, agent_service, registry, need):
        registry.upsert(make_agent("first", score=0.6))
        registry.upsert(make_agent("second", score=0.6))

        result = await agent_service.handle_citizen_need(need)

        assert result.agent_id == "first"

    @pytest.mark.asyncio
    async def test_agent_is_not_assigned_twice(self, agent_service, registry, analytics, need):
        registry.upsert(make_agent("only", score=0.7))

        first = await agent_service.handle_citizen_need(need)
        second = await agent_service.handle_citizen_need(need)

        assert first.agent_id == "only"
        assert second is None
        assert _event_names(analytics)[-1] == "no_available_agents"

    @pytest.mark.asyncio
    async def test_task_assigned_notification(self, agent_service, registry, need):
        registry.upsert(make_agent("a1", score=0.7))
        received = []

        async def on_assigned(payload):
            received.append(payload)

        agent_service.notifier.subscribe(TASK_ASSIGNED, on_assigned)
        result = await agent_service.handle_citizen_need(need)

        assert len(received) == 1
        assert received[0]["agent_id"] == "a1"
        assert received[0]["task"] == result.task

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_break_assignment(self, agent_service, registry, need):
        registry.upsert(make_agent("a1", score=0.7))
        received = []

        def broken(payload):
            raise RuntimeError("subscriber down")

        agent_service.notifier.subscribe(TASK_ASSIGNED, broken)
        agent_service.notifier.subscribe(TASK_ASSIGNED, received.append)

        result = await agent_service.handle_citizen_need(need)

        assert result.agent_id == "a1"
        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_social_metrics_pushed(self, agent_service, registry, metrics_service, need):
        registry.upsert(make_agent(
            "a1",
            response_time=0.8,
            resolution_rate=0.8,
            efficiency=0.65,
            citizen_satisfaction=0.91,
        ))

        await agent_service.handle_citizen_need(need)

        social = metrics_service.get_metrics().social
        assert social.healthcare_access_score == 0.65
        assert social.community_wellbeing == 0.91
        assert social.education_quality_index == 0.8

    @pytest.mark.asyncio
    async def test_concurrent_needs_never_share_an_agent(self, agent_service, registry):
        for i in range(3):
            registry.upsert(make_agent(f"a{i}", score=0.5))
        needs = [CitizenNeed(type="noise", description=str(i), urgency=0.5) for i in range(5)]

        results = await asyncio.gather(*(agent_service.handle_citizen_need(n) for n in needs))

        assigned = [r.agent_id for r in results if r is not None]
        assert sorted(assigned) == ["a0", "a1", "a2"]
        assert results.count(None) == 2

    @pytest.mark.asyncio
    async def test_health_update_waits_for_in_flight_assignment(self, agent_service, registry):
        registry.upsert(make_agent("a1", score=0.5))
        refreshed = make_agent("a1", score=0.5, available=False)
        task = Task(type="citizen_request", description="Broken bench", priority="low")

        async with registry.lock:
            update = asyncio.create_task(
                agent_service.on_agents_health_updated("public_works", [refreshed])
            )
            await asyncio.sleep(0)
            assert not update.done()

            agent_service._assign_task("a1", task)
            await asyncio.sleep(0)
            assert not update.done()
            assert registry.get("a1").current_task == task

        assert await update == 1
        assert registry.get("a1") is refreshed
        assert registry.get("a1").schedule.availability is False


class TestRegisterAgent:
    """Tests for agent enrollment into the vector index."""

    @pytest.fixture
    def agent(self):
        return Agent(
            id="42",
            name="Lena Fischer",
            role="Parks Officer",
            personality="cheerful",
            interests=["trees", "playgrounds"],
            traits={"empathy": 0.9, "languages": ["en", "de"]},
        )

    @pytest.mark.asyncio
    async def test_embedding_text_and_upsert_record(self, agent_service, embedding_provider, vector_index, agent):
        vector_id = await agent_service.register_agent(agent)

        assert vector_id == "agent-42"
        embedding_provider.create_embedding.assert_awaited_once_with("Parks Officer cheerful trees playgrounds")

        record = vector_index.upsert.await_args.args[0]
        assert record["id"] == "agent-42"
        assert record["values"] == [0.1, 0.2, 0.3]
        metadata = record["metadata"]
        assert metadata["type"] == "department_agent"
        assert metadata["agentId"] == "42"
        assert "agent_id" not in metadata
        assert metadata["name"] == "Lena Fischer"
        assert metadata["role"] == "Parks Officer"
        assert metadata["personality"] == "cheerful"
        assert metadata["interests"] == "trees,playgrounds"
        assert json.loads(metadata["traits"]) == {"empathy": 0.9, "languages": ["en", "de"]}
        assert metadata["department"] == "general"
        assert isinstance(metadata["timestamp"], int)

    @pytest.mark.asyncio
    async def test_department_carried_into_metadata(self, agent_service, vector_index, agent):
        agent.department = "parks"
        await agent_service.register_agent(agent)

        assert vector_index.upsert.await_args.args[0]["metadata"]["department"] == "parks"

    @pytest.mark.asyncio
    async def test_registration_tracked(self, agent_service, analytics, agent):
        await agent_service.register_agent(agent)

        event = analytics.get_events(name="agent_registered")[-1]
        assert event["payload"] == {"agent_id": "42", "role": "Parks Officer", "department": "general"}

    @pytest.mark.asyncio
    async def test_embedding_failure_skips_upsert(self, agent_service, embedding_provider, vector_index, analytics, agent):
        embedding_provider.create_embedding.side_effect = TogetherError(503, "unavailable")

        with pytest.raises(EnrollmentError) as exc_info:
            await agent_service.register_agent(agent)

        assert exc_info.value.agent_id == "42"
        assert isinstance(exc_info.value.__cause__, TogetherError)
        vector_index.upsert.assert_not_called()
        assert analytics.get_events(name="agent_registered") == []

    @pytest.mark.asyncio
    async def test_unexpected_embedding_error_is_wrapped(self, agent_service, embedding_provider, vector_index, agent):
        embedding_provider.create_embedding.side_effect = TimeoutError("read timeout")

        with pytest.raises(EnrollmentError):
            await agent_service.register_agent(agent)

        vector_index.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_upsert_failure_raises(self, agent_service, vector_index, analytics, agent):
        vector_index.upsert.side_effect = VectorStoreError(500, "index down")

        with pytest.raises(EnrollmentError):
            await agent_service.register_agent(agent)

        assert analytics.get_events(name="agent_registered") == []
