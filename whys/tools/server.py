"""MCP server exposing the five whys tools."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from whys.analysis.models import ExportFormat
from whys.config import settings
from whys.tools.dispatcher import ToolDispatcher

INSTRUCTIONS = """\
Guided five whys root cause analysis. Start with start_five_whys, answer each \
question with answer_why until the fifth answer names the root cause, then use \
export_analysis to get a markdown, text or JSON report. Only one analysis runs \
at a time; reset_analysis discards it.
"""


def register_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register the five analysis tools on ``mcp``, all backed by ``dispatcher``."""

    @mcp.tool()
    def start_five_whys(problem: str) -> str:
        """Start a new 5 whys analysis with an initial problem statement.

        Args:
            problem: The initial problem statement to analyze
        """
        return dispatcher.call("start_five_whys", lambda engine: engine.start(problem))

    @mcp.tool()
    def answer_why(answer: str) -> str:
        """Answer the current "why" question in the analysis.

        Args:
            answer: The answer to the current why question
        """
        return dispatcher.call("answer_why", lambda engine: engine.answer_why(answer))

    @mcp.tool()
    def get_current_state() -> str:
        """Get the current state of the analysis."""
        return dispatcher.call("get_current_state", lambda engine: engine.get_current_state())

    @mcp.tool()
    def export_analysis(format: ExportFormat = settings.default_export_format) -> str:
        """Export the current analysis in the specified format.

        Args:
            format: Export format (markdown, json or text)
        """
        return dispatcher.call("export_analysis", lambda engine: engine.export_analysis(format))

    @mcp.tool()
    def reset_analysis() -> str:
        """Reset the current analysis to start fresh."""
        return dispatcher.call("reset_analysis", lambda engine: engine.reset_analysis())


def create_server(dispatcher: ToolDispatcher | None = None) -> FastMCP:
    """Create the MCP server.

    The streamable HTTP endpoint is served at the root of whatever path the
    returned server's ``streamable_http_app()`` is mounted under.
    """
    mcp = FastMCP(
        settings.service_name,
        instructions=INSTRUCTIONS,
        streamable_http_path="/",
    )
    register_tools(mcp, dispatcher or ToolDispatcher())
    return mcp
