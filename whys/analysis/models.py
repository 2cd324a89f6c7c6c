"""Data models for a five whys analysis and the engine that drives it."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_LEVEL = 5


class ExportFormat(str, Enum):
    MARKDOWN = "markdown"
    TEXT = "text"
    JSON = "json"


class AnalysisError(str, Enum):
    """Why an engine operation was rejected."""

    ALREADY_IN_PROGRESS = "already_in_progress"
    EMPTY_PROBLEM = "empty_problem"
    NO_ANALYSIS_IN_PROGRESS = "no_analysis_in_progress"
    NOT_WAITING_FOR_ANSWER = "not_waiting_for_answer"
    EMPTY_ANSWER = "empty_answer"
    NO_ANALYSIS_TO_EXPORT = "no_analysis_to_export"
    UNSUPPORTED_FORMAT = "unsupported_format"
    INTERNAL_STATE_ERROR = "internal_state_error"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WhyQuestion(_CamelModel):
    """One step of the interview."""

    level: int = Field(ge=1)
    question: str = Field(min_length=1)
    answer: str | None = None


class Analysis(_CamelModel):
    """A single interview from problem statement to root cause."""

    # uuid4: 122 random bits, ~1 in 2^61 collision odds after 2^30 ids
    id: str = Field(default_factory=lambda: uuid4().hex)
    problem: str = Field(min_length=1)
    questions: list[WhyQuestion] = Field(default_factory=list)
    start_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: datetime | None = None
    is_complete: bool = False
    root_cause: str | None = None

    def question_at(self, level: int) -> WhyQuestion | None:
        for q in self.questions:
            if q.level == level:
                return q
        return None


class EngineState(BaseModel):
    """Mutable state owned by one AnalysisEngine."""

    current_analysis: Analysis | None = None
    current_level: int = 0  # level awaiting an answer, 0 when idle
    is_waiting_for_answer: bool = False


class AnalysisResult(BaseModel):
    """Uniform outcome of every engine operation."""

    success: bool
    message: str
    analysis: Analysis | None = None
    next_question: str | None = None
    export_data: str | None = None
    error: AnalysisError | None = None

    @property
    def is_internal_error(self) -> bool:
        return self.error is AnalysisError.INTERNAL_STATE_ERROR
