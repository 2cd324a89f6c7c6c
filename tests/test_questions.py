"""Tests for question templates."""

import pytest

from whys.analysis.models import MAX_LEVEL
from whys.analysis.questions import generate_why_question


def test_each_level_has_a_distinct_fixed_question():
    questions = [generate_why_question(level) for level in range(1, MAX_LEVEL + 1)]
    assert len(set(questions)) == MAX_LEVEL
    assert questions[0] == "Why did this problem occur?"
    assert questions[-1] == "What is the root cause of this issue?"


def test_template_ignores_previous_answer():
    assert generate_why_question(2, "Out of memory") == generate_why_question(2)


def test_levels_past_templates_quote_previous_answer():
    assert generate_why_question(MAX_LEVEL + 1, "Cache never evicts") == 'Why did "Cache never evicts" occur?'


def test_level_below_one_is_invalid():
    with pytest.raises(ValueError):
        generate_why_question(0)
