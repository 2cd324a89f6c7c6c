"""Question templates for each level of the interview."""

from __future__ import annotations

_BASE_QUESTIONS = (
    "Why did this problem occur?",
    "Why did this happen?",
    "What caused this situation?",
    "Why did this underlying cause occur?",
    "What is the root cause of this issue?",
)


def generate_why_question(level: int, previous_answer: str | None = None) -> str:
    """Return the question text for ``level`` (1-indexed).

    Levels covered by the template list get a fixed phrase. Deeper levels
    quote the previous answer instead; the engine stops at MAX_LEVEL, so that
    branch only runs if the depth is ever raised past the template list.
    """
    if level < 1:
        raise ValueError(f"Question level must be >= 1, got {level}")

    if level <= len(_BASE_QUESTIONS):
        return _BASE_QUESTIONS[level - 1]

    return f'Why did "{previous_answer}" occur?'
