"""Tool dispatcher — runs tool calls against one serialized AnalysisEngine."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from mcp.server.fastmcp.exceptions import ToolError
from opentelemetry import trace

from whys.analysis.engine import AnalysisEngine
from whys.analysis.models import AnalysisResult, EngineState
from whys.telemetry.metrics import analyses_completed_total, analyses_started_total, tool_calls_total
from whys.tools.formatting import format_result

logger = logging.getLogger("whys.tools")
tracer = trace.get_tracer(__name__)

Operation = Callable[[AnalysisEngine], AnalysisResult]


class ToolDispatcher:
    """Runs exactly one engine operation per tool call and renders the result.

    Engine transitions are check-then-act, so every call runs under a single
    lock; overlapping requests are applied one at a time. Faults escaping an
    operation are logged and surfaced as a generic ``ToolError``.
    """

    def __init__(self, engine: AnalysisEngine | None = None) -> None:
        self._engine = engine or AnalysisEngine()
        self._lock = threading.Lock()

    def engine_state(self) -> EngineState:
        with self._lock:
            return self._engine.state

    def execute(self, tool: str, operation: Operation) -> AnalysisResult:
        with tracer.start_as_current_span(tool) as span:
            span.set_attribute("tool.name", tool)
            try:
                with self._lock:
                    result = operation(self._engine)
            except Exception:
                logger.exception("Tool %s failed", tool)
                tool_calls_total.labels(tool=tool, outcome="error").inc()
                span.set_attribute("tool.success", False)
                raise ToolError("Unknown error occurred") from None

            span.set_attribute("tool.success", result.success)

        self._record(tool, result)
        return result

    def call(self, tool: str, operation: Operation) -> str:
        """Execute and render: export payloads verbatim, everything else via ``format_result``."""
        result = self.execute(tool, operation)
        if result.success and result.export_data is not None:
            return result.export_data
        return format_result(result)

    @staticmethod
    def _record(tool: str, result: AnalysisResult) -> None:
        tool_calls_total.labels(tool=tool, outcome="success" if result.success else "rejected").inc()
        if not result.success:
            return
        if tool == "start_five_whys":
            analyses_started_total.inc()
        elif tool == "answer_why" and result.analysis and result.analysis.is_complete:
            analyses_completed_total.inc()
