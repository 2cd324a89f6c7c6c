"""Pytest fixtures for five whys tests."""

import pytest
from fastapi.testclient import TestClient

from whys.analysis.engine import AnalysisEngine
from whys.tools.dispatcher import ToolDispatcher

ANSWERS = [
    "Out of memory",
    "Memory leak in cache",
    "Cache never evicts",
    "Eviction policy missing",
    "Feature never implemented",
]


@pytest.fixture
def answers() -> list[str]:
    return list(ANSWERS)


@pytest.fixture
def engine() -> AnalysisEngine:
    return AnalysisEngine()


@pytest.fixture
def started_engine(engine: AnalysisEngine) -> AnalysisEngine:
    engine.start("Server crashed")
    return engine


@pytest.fixture
def completed_engine(started_engine: AnalysisEngine) -> AnalysisEngine:
    for answer in ANSWERS:
        started_engine.answer_why(answer)
    return started_engine


@pytest.fixture
def dispatcher() -> ToolDispatcher:
    return ToolDispatcher()


@pytest.fixture
def client():
    from whys.main import create_app

    with TestClient(create_app()) as c:
        yield c
