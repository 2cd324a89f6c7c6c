"""Tests for tool result text."""

from whys.tools.formatting import format_result


def test_failure_is_message_only(engine):
    text = format_result(engine.answer_why("x"))
    assert text == "❌ No analysis in progress. Please start an analysis first."


def test_in_progress_lists_trail_and_next_question(started_engine):
    text = format_result(started_engine.answer_why("Out of memory"))

    assert text.startswith("✅ Answer recorded.")
    assert "- Problem: Server crashed" in text
    assert "- Status: In Progress" in text
    assert "- Progress: 2/5 questions" in text
    assert "1. Why did this problem occur?\n   → Out of memory" in text
    assert "2. Why did this happen?\n   → *Awaiting answer...*" in text
    assert text.endswith("**Next Question:**\nWhy did this happen?")
    assert "Root Cause Identified" not in text


def test_complete_shows_root_cause(completed_engine):
    text = format_result(completed_engine.get_current_state())

    assert "- Status: Complete" in text
    assert "Root Cause Identified:**\nFeature never implemented" in text
    assert "Next Question" not in text


def test_reset_has_no_analysis_section(started_engine):
    text = format_result(started_engine.reset_analysis())
    assert "Current Analysis" not in text
