"""
Tests for the stream channel and the analysis stream emitter.

Timeout tests use real (short) asyncio delays so the per-agent and
global races behave as they would under load.
"""

import asyncio
import json

import pytest

from analyzer.shared.contracts.stream_events import (
    AgentErrorEvent,
    AnalysisCompleteEvent,
    AnalysisStartEvent,
    ErrorEvent,
    format_sse,
)
from analyzer.streaming.channel import StreamChannel
from analyzer.streaming.emitter import (
    AGENT_TIMEOUT_MESSAGE,
    STREAM_TIMEOUT_MESSAGE,
    AnalysisStreamEmitter,
    progress_percent,
    split_chunks,
)
from analyzer.tests.fakes import TWO_AGENTS, FakeModelClient, make_orchestrator


TEXT_1200 = "".join(chr(ord("a") + i % 26) for i in range(1200))


async def _run_stream(model_client, **config_overrides):
    orchestrator = make_orchestrator(model_client, agents=TWO_AGENTS, **config_overrides)
    channel = StreamChannel()
    emitter = AnalysisStreamEmitter(orchestrator, channel, config=orchestrator.config)
    await emitter.run("paper body", "A Paper")
    return channel


async def _collect(channel):
    return [frame async for frame in channel]


def _types(channel):
    return [event.type for event in channel.sent]


class TestHelpers:

    def test_split_chunks_exact_slices(self):
        assert split_chunks("a" * 1200) == ["a" * 500, "a" * 500, "a" * 200]

    def test_split_chunks_keeps_newlines(self):
        text = "line one\nline two\n" * 40
        assert "".join(split_chunks(text, 100)) == text

    def test_split_chunks_empty_text(self):
        assert split_chunks("") == [""]

    @pytest.mark.parametrize(
        "index,total,expected",
        [(0, 4, 0), (1, 4, 25), (1, 2, 50), (1, 8, 13), (1, 3, 33), (2, 3, 67)],
    )
    def test_progress_percent(self, index, total, expected):
        assert progress_percent(index, total) == expected

    def test_progress_percent_no_agents(self):
        assert progress_percent(0, 0) == 0


class TestFrameFormat:

    def test_frame_is_single_data_line(self):
        frame = format_sse(AnalysisStartEvent(total_agents=4))

        assert frame.startswith("data: ")
        assert frame.endswith("\n\n")
        payload = json.loads(frame[len("data: "):])
        assert payload == {
            "type": "analysis-start",
            "message": "Starting multi-agent analysis...",
            "totalAgents": 4,
        }

    def test_agent_error_uses_camel_case(self):
        frame = format_sse(AgentErrorEvent(agent_id="alpha", error="boom"))
        payload = json.loads(frame[len("data: "):])
        assert payload == {"type": "agent-error", "agentId": "alpha", "error": "boom"}


class TestStreamChannel:

    @pytest.mark.asyncio
    async def test_no_emits_after_terminal_event(self):
        channel = StreamChannel()

        assert channel.emit(AnalysisCompleteEvent())
        assert not channel.emit(ErrorEvent(error="late"))
        channel.close()

        frames = await _collect(channel)
        assert len(frames) == 1
        assert channel.completed

    @pytest.mark.asyncio
    async def test_double_close_is_safe(self):
        channel = StreamChannel()
        channel.emit(AnalysisStartEvent(total_agents=1))

        channel.close()
        channel.close()
        channel.cancel()

        frames = await _collect(channel)
        assert len(frames) == 1
        assert channel.closed

    @pytest.mark.asyncio
    async def test_emit_after_close_is_dropped(self):
        channel = StreamChannel()
        channel.close()

        assert not channel.emit(AnalysisStartEvent(total_agents=1))
        assert await _collect(channel) == []


class TestEmitterSequence:

    @pytest.mark.asyncio
    async def test_full_event_sequence(self):
        channel = await _run_stream(FakeModelClient(default=TEXT_1200))

        agent_block = [
            "agent-start",
            "analysis-chunk",
            "analysis-chunk",
            "analysis-chunk",
            "agent-complete",
        ]
        assert _types(channel) == (
            ["analysis-start"] + agent_block + agent_block + ["analysis-complete"]
        )

    @pytest.mark.asyncio
    async def test_chunks_rejoin_to_analysis(self):
        channel = await _run_stream(FakeModelClient(default=TEXT_1200))

        for agent_id in ("alpha", "beta"):
            chunks = [
                e.chunk
                for e in channel.sent
                if e.type == "analysis-chunk" and e.agent_id == agent_id
            ]
            assert "".join(chunks) == TEXT_1200
            assert all(len(c) <= 500 for c in chunks)

    @pytest.mark.asyncio
    async def test_start_event_and_progress(self):
        channel = await _run_stream(FakeModelClient(default=TEXT_1200))

        start = channel.sent[0]
        assert start.total_agents == 2
        assert start.message == "Starting multi-agent analysis..."

        agent_starts = [e for e in channel.sent if e.type == "agent-start"]
        assert [(e.agent_id, e.agent_name, e.progress) for e in agent_starts] == [
            ("alpha", "Alpha Reviewer", 0),
            ("beta", "Beta Reviewer", 50),
        ]
        assert channel.sent[-1].message == "Multi-agent analysis completed"

    @pytest.mark.asyncio
    async def test_frames_match_sent_events(self):
        channel = await _run_stream(FakeModelClient(default="short"))

        frames = await _collect(channel)

        types = [json.loads(f[len("data: "):])["type"] for f in frames]
        assert types == _types(channel)
        assert channel.closed

    @pytest.mark.asyncio
    async def test_short_analysis_is_one_chunk(self):
        channel = await _run_stream(FakeModelClient(default="short"))

        chunks = [e for e in channel.sent if e.type == "analysis-chunk"]
        assert [c.chunk for c in chunks] == ["short", "short"]


class TestEmitterFailures:

    @pytest.mark.asyncio
    async def test_degraded_agent_emits_agent_error(self):
        client = FakeModelClient(default=TEXT_1200, fail_for=["ALPHA"])

        channel = await _run_stream(client)

        assert _types(channel)[:3] == ["analysis-start", "agent-start", "agent-error"]
        error = channel.sent[2]
        assert error.agent_id == "alpha"
        assert error.error.startswith("Analysis failed after 3 attempts.")
        assert _types(channel)[-2:] == ["agent-complete", "analysis-complete"]

    @pytest.mark.asyncio
    async def test_agent_timeout_moves_on(self):
        client = FakeModelClient(default="ok", delays={"ALPHA": 1.0})

        channel = await _run_stream(client, agent_timeout=0.05)

        assert _types(channel) == [
            "analysis-start",
            "agent-start",
            "agent-error",
            "agent-start",
            "analysis-chunk",
            "agent-complete",
            "analysis-complete",
        ]
        assert channel.sent[2].error == AGENT_TIMEOUT_MESSAGE
        assert channel.sent[3].agent_id == "beta"

    @pytest.mark.asyncio
    async def test_global_timeout_ends_with_single_error(self):
        client = FakeModelClient(default="ok", delays={"ALPHA": 1.0})

        channel = await _run_stream(client, stream_timeout=0.05)

        types = _types(channel)
        assert types == ["analysis-start", "agent-start", "error"]
        assert channel.sent[-1].error == STREAM_TIMEOUT_MESSAGE
        assert "analysis-complete" not in types
        assert channel.closed

    @pytest.mark.asyncio
    async def test_unexpected_failure_ends_with_error_event(self):
        orchestrator = make_orchestrator(FakeModelClient(), agents=TWO_AGENTS)

        def broken_agents():
            raise RuntimeError("registry unavailable")

        orchestrator.get_agents = broken_agents
        channel = StreamChannel()

        await AnalysisStreamEmitter(orchestrator, channel).run("body", "Title")

        assert _types(channel) == ["error"]
        assert channel.sent[0].error == "registry unavailable"
        assert channel.closed


class TestCancellation:

    @pytest.mark.asyncio
    async def test_consumer_cancel_stops_emission(self):
        client = FakeModelClient(default="ok", delays={"ALPHA": 0.05, "BETA": 0.05})
        orchestrator = make_orchestrator(client, agents=TWO_AGENTS)
        channel = StreamChannel()
        emitter = AnalysisStreamEmitter(orchestrator, channel, config=orchestrator.config)

        task = asyncio.create_task(emitter.run("paper body", "A Paper"))
        frames = []
        async for frame in channel:
            frames.append(frame)
            if '"agent-start"' in frame:
                channel.cancel()
                break

        await task

        assert _types(channel) == ["analysis-start", "agent-start"]
        assert channel.completed
        assert channel.closed
        assert [c["system_prompt"] for c in client.calls] == ["ALPHA"]

    @pytest.mark.asyncio
    async def test_consumer_cancel_stops_attached_producer(self):
        client = FakeModelClient(default="ok", delays={"ALPHA": 5.0})
        orchestrator = make_orchestrator(client, agents=TWO_AGENTS)
        channel = StreamChannel()
        emitter = AnalysisStreamEmitter(orchestrator, channel, config=orchestrator.config)

        task = asyncio.create_task(emitter.run("paper body", "A Paper"))
        channel.attach_producer(task)
        async for frame in channel:
            if '"agent-start"' in frame:
                channel.cancel()
                break

        # Cancellation interrupts the 5s model call instead of waiting it out
        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(task, timeout=1.0)

        assert task.cancelled()
        assert client.in_flight == 0
        assert [c["system_prompt"] for c in client.calls] == ["ALPHA"]
        assert _types(channel) == ["analysis-start", "agent-start"]
        assert channel.closed

    @pytest.mark.asyncio
    async def test_cancel_after_producer_finished_is_harmless(self):
        channel = StreamChannel()
        orchestrator = make_orchestrator(FakeModelClient(default="ok"), agents=TWO_AGENTS)
        emitter = AnalysisStreamEmitter(orchestrator, channel, config=orchestrator.config)

        task = asyncio.create_task(emitter.run("paper body", "A Paper"))
        channel.attach_producer(task)
        frames = await _collect(channel)
        await task
        channel.cancel()

        assert not task.cancelled()
        assert _types(channel)[-1] == "analysis-complete"
        assert len(frames) == len(channel.sent)
