"""
Tests for the orchestrator and the analysis graph routing.
"""

import logging

import pytest

from analyzer.agents.registry import AGENT_REGISTRY, Agent
from analyzer.graph.router import route_next_agent
from analyzer.tests.fakes import GOOD_ANALYSIS, TWO_AGENTS, FakeModelClient, make_orchestrator


class TestRouteNextAgent:
    """Tests for the route_next_agent router function."""

    def test_routes_to_agent_when_remaining(self):
        state = {"agent_ids": ["a", "b"], "agent_index": 1, "session_id": "s"}
        assert route_next_agent(state) == "analyze_agent"

    def test_routes_to_complete_when_exhausted(self):
        state = {"agent_ids": ["a", "b"], "agent_index": 2, "session_id": "s"}
        assert route_next_agent(state) == "complete"

    def test_empty_registry_completes_immediately(self):
        state = {"agent_ids": [], "agent_index": 0}
        assert route_next_agent(state) == "complete"


class TestGetAgents:

    def test_returns_registry_in_order(self):
        orchestrator = make_orchestrator(FakeModelClient())
        ids = [agent.id for agent in orchestrator.get_agents()]
        assert ids == [
            "theoretical-physicist",
            "experimental-physicist",
            "peer-reviewer",
            "epistemic-analyst",
        ]

    def test_mutating_returned_list_has_no_effect(self):
        orchestrator = make_orchestrator(FakeModelClient())

        agents = orchestrator.get_agents()
        agents.clear()
        agents.append(Agent(id="x", name="X", role="X", system_prompt="X"))

        assert len(orchestrator.get_agents()) == len(AGENT_REGISTRY)


class TestRunAll:

    @pytest.mark.asyncio
    async def test_one_result_per_agent_in_order(self, model_client):
        orchestrator = make_orchestrator(model_client)

        results = await orchestrator.run_all("paper body", "A Paper")

        assert [r.agent_id for r in results] == [a.id for a in AGENT_REGISTRY]
        assert [r.agent_name for r in results] == [a.name for a in AGENT_REGISTRY]
        for result in results:
            assert 0.0 <= result.score <= 1.0
            assert result.analysis == GOOD_ANALYSIS
            assert not result.degraded

    @pytest.mark.asyncio
    async def test_failing_agent_is_degraded_in_its_slot(self):
        failing = AGENT_REGISTRY[1]
        client = FakeModelClient(fail_for=[failing.system_prompt])
        orchestrator = make_orchestrator(client)

        results = await orchestrator.run_all("paper body", "A Paper")

        assert len(results) == 4
        assert results[1].agent_id == failing.id
        assert results[1].degraded
        assert results[1].score == 0
        assert "Analysis failed after 3 attempts" in results[1].analysis
        for i in (0, 2, 3):
            assert not results[i].degraded

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_degraded_result(self, model_client):
        orchestrator = make_orchestrator(model_client, agents=TWO_AGENTS)
        original_invoke = orchestrator.invoker.invoke

        async def flaky_invoke(agent_id, *args, **kwargs):
            if agent_id == "alpha":
                raise RuntimeError("wiring broke")
            return await original_invoke(agent_id, *args, **kwargs)

        orchestrator.invoker.invoke = flaky_invoke

        results = await orchestrator.run_all("paper body", "A Paper")

        assert [r.agent_id for r in results] == ["alpha", "beta"]
        assert results[0].agent_name == "Alpha Reviewer"
        assert results[0].analysis == "Analysis failed: wiring broke"
        assert results[0].score == 0
        assert results[0].error == "wiring broke"
        assert not results[1].degraded

    @pytest.mark.asyncio
    async def test_agents_never_overlap(self, model_client):
        orchestrator = make_orchestrator(model_client)

        await orchestrator.run_all("paper body", "A Paper")

        assert len(model_client.calls) == 4
        assert model_client.max_in_flight == 1

    @pytest.mark.asyncio
    async def test_calls_follow_registry_order(self, model_client):
        orchestrator = make_orchestrator(model_client, agents=TWO_AGENTS)

        await orchestrator.run_all("paper body", "A Paper")

        assert [c["system_prompt"] for c in model_client.calls] == ["ALPHA", "BETA"]

    @pytest.mark.asyncio
    async def test_empty_content_is_still_analyzed(self, model_client):
        orchestrator = make_orchestrator(model_client, agents=TWO_AGENTS)

        results = await orchestrator.run_all("", "Empty")

        assert len(results) == 2
        assert "Content: " in model_client.calls[0]["user_prompt"]


class TestAnalyzeWithAgent:

    @pytest.mark.asyncio
    async def test_delegates_to_invoker(self, model_client):
        orchestrator = make_orchestrator(model_client)

        result = await orchestrator.analyze_with_agent(
            "peer-reviewer", "paper body", "A Paper"
        )

        assert result.agent_id == "peer-reviewer"
        assert result.agent_name == "Peer Reviewer"


class TestRunLog:
    """The graph's message trail is reported when a run finishes."""

    @pytest.mark.asyncio
    async def test_summary_message_is_logged(self, caplog):
        client = FakeModelClient(fail_for=["BETA"])
        orchestrator = make_orchestrator(client, agents=TWO_AGENTS)

        with caplog.at_level(logging.DEBUG, logger="analyzer.graph.orchestrator"):
            await orchestrator.run_all("paper body", "A Paper", session_id="s-42")

        lines = [
            r.getMessage() for r in caplog.records
            if r.name == "analyzer.graph.orchestrator"
        ]
        finished = [line for line in lines if "Analysis finished" in line]
        assert len(finished) == 1
        assert "Analysis complete. 1 of 2 agents succeeded." in finished[0]
        assert any("[alpha] Alpha Reviewer analysis complete" in line for line in lines)
        assert any("[beta] Beta Reviewer analysis degraded" in line for line in lines)
        assert any("Analysis started for A Paper" in line for line in lines)
