"""Analysis export — renders an analysis as markdown, plain text or JSON."""

from __future__ import annotations

from datetime import datetime

from whys.analysis.models import Analysis, ExportFormat

_AWAITING = "Awaiting answer..."


def _local_time(ts: datetime) -> str:
    return ts.astimezone().strftime("%c")


def _status(analysis: Analysis) -> str:
    return "Complete" if analysis.is_complete else "In Progress"


def format_as_json(analysis: Analysis) -> str:
    """camelCase JSON; unset ``endTime``, ``rootCause`` and answers are omitted."""
    return analysis.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def format_as_markdown(analysis: Analysis) -> str:
    lines = [
        "# 5 Whys Analysis",
        "",
        f"**Problem:** {analysis.problem}",
        "",
        f"**Started:** {_local_time(analysis.start_time)}",
    ]
    if analysis.end_time:
        lines.append(f"**Completed:** {_local_time(analysis.end_time)}")
    lines += [f"**Status:** {_status(analysis)}", "", "## Analysis Steps", ""]

    for index, q in enumerate(analysis.questions, start=1):
        lines.append(f"### {index}. {q.question}")
        lines.append(f"**Answer:** {q.answer}" if q.answer else f"*{_AWAITING}*")
        lines.append("")

    if analysis.root_cause:
        lines += ["## Root Cause", "", f"**{analysis.root_cause}**", ""]

    return "\n".join(lines) + "\n"


def format_as_text(analysis: Analysis) -> str:
    lines = [
        "5 WHYS ANALYSIS",
        "===============",
        "",
        f"Problem: {analysis.problem}",
        f"Started: {_local_time(analysis.start_time)}",
    ]
    if analysis.end_time:
        lines.append(f"Completed: {_local_time(analysis.end_time)}")
    lines += [f"Status: {_status(analysis)}", "", "ANALYSIS STEPS", "--------------", ""]

    for index, q in enumerate(analysis.questions, start=1):
        lines.append(f"{index}. {q.question}")
        lines.append(f"   Answer: {q.answer}" if q.answer else f"   {_AWAITING}")
        lines.append("")

    if analysis.root_cause:
        lines += ["ROOT CAUSE", "----------", analysis.root_cause, ""]

    return "\n".join(lines) + "\n"


_RENDERERS = {
    ExportFormat.MARKDOWN: format_as_markdown,
    ExportFormat.TEXT: format_as_text,
    ExportFormat.JSON: format_as_json,
}


def render_analysis(analysis: Analysis, fmt: ExportFormat = ExportFormat.MARKDOWN) -> str:
    """Render ``analysis`` in ``fmt``. Does not modify the analysis."""
    return _RENDERERS[fmt](analysis)
