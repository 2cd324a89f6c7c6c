"""Five whys engine — drives one analysis through its question/answer levels."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from whys.analysis.models import (
    MAX_LEVEL,
    Analysis,
    AnalysisError,
    AnalysisResult,
    EngineState,
    ExportFormat,
    WhyQuestion,
)
from whys.analysis.questions import generate_why_question
from whys.reporting.export import render_analysis

logger = logging.getLogger("whys.analysis")


def _failure(error: AnalysisError, message: str) -> AnalysisResult:
    return AnalysisResult(success=False, message=message, error=error)


class AnalysisEngine:
    """Owns a single analysis and enforces the level-by-level sequence.

    Every operation returns an ``AnalysisResult``; misuse is reported through
    ``success=False`` and an ``AnalysisError`` kind rather than raised. The
    engine is not thread-safe: callers sharing one instance must serialize
    access (see ``whys.tools.dispatcher.ToolDispatcher``).
    """

    def __init__(self) -> None:
        self._state = EngineState()

    @property
    def state(self) -> EngineState:
        """A detached copy of the current engine state."""
        return self._state.model_copy(deep=True)

    def _snapshot(self) -> Analysis | None:
        analysis = self._state.current_analysis
        return analysis.model_copy(deep=True) if analysis else None

    def start(self, problem: str) -> AnalysisResult:
        current = self._state.current_analysis
        if current and not current.is_complete:
            logger.info("Start rejected: analysis %s still in progress", current.id)
            return _failure(
                AnalysisError.ALREADY_IN_PROGRESS,
                "An analysis is already in progress. Please complete it or reset before starting a new one.",
            )

        problem = problem.strip()
        if not problem:
            return _failure(AnalysisError.EMPTY_PROBLEM, "Please provide a problem statement to analyze.")

        first_question = generate_why_question(1)
        analysis = Analysis(problem=problem, questions=[WhyQuestion(level=1, question=first_question)])

        self._state = EngineState(
            current_analysis=analysis,
            current_level=1,
            is_waiting_for_answer=True,
        )
        logger.info("Analysis started: id=%s problem=%r", analysis.id, problem)

        return AnalysisResult(
            success=True,
            message="Analysis started successfully. Please answer the first 'why' question.",
            analysis=self._snapshot(),
            next_question=first_question,
        )

    def answer_why(self, answer: str) -> AnalysisResult:
        analysis = self._state.current_analysis
        if analysis is None:
            return _failure(
                AnalysisError.NO_ANALYSIS_IN_PROGRESS,
                "No analysis in progress. Please start an analysis first.",
            )

        if not self._state.is_waiting_for_answer:
            return _failure(
                AnalysisError.NOT_WAITING_FOR_ANSWER,
                "Not waiting for an answer. The analysis may be complete.",
            )

        answer = answer.strip()
        if not answer:
            return _failure(AnalysisError.EMPTY_ANSWER, "Please provide a meaningful answer.")

        level = self._state.current_level
        question = analysis.question_at(level)
        if question is None:
            logger.error(
                "Inconsistent engine state: no question at level %d for analysis %s",
                level, analysis.id,
            )
            return _failure(AnalysisError.INTERNAL_STATE_ERROR, "Error: Current question not found.")

        question.answer = answer

        if level >= MAX_LEVEL:
            analysis.is_complete = True
            analysis.end_time = datetime.now(timezone.utc)
            analysis.root_cause = answer
            self._state.is_waiting_for_answer = False
            logger.info("Analysis complete: id=%s root_cause=%r", analysis.id, answer)

            return AnalysisResult(
                success=True,
                message="Analysis complete! You have identified the root cause.",
                analysis=self._snapshot(),
            )

        next_level = level + 1
        next_question = generate_why_question(next_level, answer)
        analysis.questions.append(WhyQuestion(level=next_level, question=next_question))
        self._state.current_level = next_level
        logger.info("Answer recorded: id=%s level=%d/%d", analysis.id, level, MAX_LEVEL)

        return AnalysisResult(
            success=True,
            message=f"Answer recorded. Please answer the next 'why' question ({next_level}/{MAX_LEVEL}).",
            analysis=self._snapshot(),
            next_question=next_question,
        )

    def get_current_state(self) -> AnalysisResult:
        analysis = self._state.current_analysis
        if analysis is None:
            return _failure(AnalysisError.NO_ANALYSIS_IN_PROGRESS, "No analysis in progress.")

        next_question = None
        if self._state.is_waiting_for_answer:
            pending = analysis.question_at(self._state.current_level)
            next_question = pending.question if pending else None

        if analysis.is_complete:
            message = "Analysis is complete."
        else:
            message = f"Analysis in progress ({self._state.current_level}/{MAX_LEVEL})."
            if self._state.is_waiting_for_answer:
                message += " Waiting for answer."

        return AnalysisResult(
            success=True,
            message=message,
            analysis=self._snapshot(),
            next_question=next_question,
        )

    def export_analysis(self, format: ExportFormat | str = ExportFormat.MARKDOWN) -> AnalysisResult:
        if self._state.current_analysis is None:
            return _failure(AnalysisError.NO_ANALYSIS_TO_EXPORT, "No analysis to export.")

        try:
            fmt = ExportFormat(format)
        except ValueError:
            supported = ", ".join(f.value for f in ExportFormat)
            return _failure(
                AnalysisError.UNSUPPORTED_FORMAT,
                f"Unsupported export format {format!r}. Choose one of: {supported}.",
            )

        analysis = self._snapshot()
        return AnalysisResult(
            success=True,
            message=f"Analysis exported as {fmt.value}.",
            analysis=analysis,
            export_data=render_analysis(analysis, fmt),
        )

    def reset_analysis(self) -> AnalysisResult:
        previous = self._state.current_analysis
        self._state = EngineState()
        if previous:
            logger.info("Analysis reset: id=%s discarded", previous.id)

        return AnalysisResult(
            success=True,
            message="Analysis reset successfully. You can start a new analysis.",
        )
