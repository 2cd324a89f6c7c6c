"""Tests for service configuration."""

import pytest
from pydantic import ValidationError

from whys.analysis.models import ExportFormat
from whys.config import Settings


def test_defaults():
    assert Settings().default_export_format is ExportFormat.MARKDOWN


def test_export_format_from_env(monkeypatch):
    monkeypatch.setenv("WHYS_DEFAULT_EXPORT_FORMAT", "json")
    assert Settings().default_export_format is ExportFormat.JSON


def test_unknown_export_format_rejected_at_load(monkeypatch):
    monkeypatch.setenv("WHYS_DEFAULT_EXPORT_FORMAT", "pdf")
    with pytest.raises(ValidationError):
        Settings()
