"""Tests for tool dispatch."""

import json
import threading

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from whys.analysis.engine import AnalysisEngine
from whys.analysis.models import AnalysisError, ExportFormat
from whys.tools.dispatcher import ToolDispatcher


class _ExplodingEngine(AnalysisEngine):
    def start(self, problem):
        raise RuntimeError("boom")


def _start(engine):
    return engine.start("Server crashed")


def test_start_and_answer(dispatcher):
    text = dispatcher.call("start_five_whys", _start)
    assert text.startswith("✅ Analysis started successfully.")
    assert "**Next Question:**\nWhy did this problem occur?" in text

    text = dispatcher.call("answer_why", lambda engine: engine.answer_why("Out of memory"))
    assert "(2/5)" in text
    assert dispatcher.engine_state().current_level == 2


def test_rejections_are_rendered_not_raised(dispatcher):
    text = dispatcher.call("get_current_state", lambda engine: engine.get_current_state())
    assert text == "❌ No analysis in progress."


def test_export_returns_payload_verbatim(dispatcher):
    dispatcher.call("start_five_whys", _start)

    text = dispatcher.call("export_analysis", lambda engine: engine.export_analysis(ExportFormat.JSON))

    assert json.loads(text)["problem"] == "Server crashed"


def test_failed_export_is_formatted(dispatcher):
    text = dispatcher.call("export_analysis", lambda engine: engine.export_analysis(ExportFormat.TEXT))
    assert text == "❌ No analysis to export."


def test_unexpected_fault_is_isolated():
    dispatcher = ToolDispatcher(engine=_ExplodingEngine())

    with pytest.raises(ToolError, match="Unknown error occurred"):
        dispatcher.call("start_five_whys", _start)

    text = dispatcher.call("get_current_state", lambda engine: engine.get_current_state())
    assert text == "❌ No analysis in progress."


def test_fault_does_not_hold_the_lock():
    dispatcher = ToolDispatcher(engine=_ExplodingEngine())
    with pytest.raises(ToolError):
        dispatcher.execute("start_five_whys", _start)

    assert dispatcher.engine_state().current_analysis is None


def test_overlapping_starts_are_serialized(dispatcher):
    workers = 20
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def start():
        barrier.wait()
        result = dispatcher.execute("start_five_whys", _start)
        with results_lock:
            results.append(result)

    threads = [threading.Thread(target=start) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(results) == workers
    assert sum(r.success for r in results) == 1
    rejected = [r for r in results if not r.success]
    assert {r.error for r in rejected} == {AnalysisError.ALREADY_IN_PROGRESS}

    state = dispatcher.engine_state()
    assert state.current_level == 1
    assert len(state.current_analysis.questions) == 1


def test_reset(dispatcher):
    dispatcher.call("start_five_whys", _start)

    text = dispatcher.call("reset_analysis", lambda engine: engine.reset_analysis())

    assert text == "✅ Analysis reset successfully. You can start a new analysis."
    assert dispatcher.engine_state().current_analysis is None
