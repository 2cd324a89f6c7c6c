"""Render engine results as caller-facing text."""

from __future__ import annotations

from whys.analysis.models import MAX_LEVEL, AnalysisResult


def format_result(result: AnalysisResult) -> str:
    if not result.success:
        return f"❌ {result.message}"

    parts = [f"✅ {result.message}"]

    analysis = result.analysis
    if analysis:
        summary = [
            "**Current Analysis:**",
            f"- Problem: {analysis.problem}",
            f"- Status: {'Complete' if analysis.is_complete else 'In Progress'}",
            f"- Progress: {len(analysis.questions)}/{MAX_LEVEL} questions",
        ]
        parts.append("\n".join(summary))

        if analysis.questions:
            trail = ["**Questions & Answers:**"]
            for index, q in enumerate(analysis.questions, start=1):
                trail.append(f"{index}. {q.question}")
                trail.append(f"   → {q.answer}" if q.answer else "   → *Awaiting answer...*")
            parts.append("\n".join(trail))

        if analysis.root_cause:
            parts.append(f"**\U0001f3af Root Cause Identified:**\n{analysis.root_cause}")

    if result.next_question:
        parts.append(f"**Next Question:**\n{result.next_question}")

    return "\n\n".join(parts)
