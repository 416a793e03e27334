"""Shared pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Repo root holds both the package and main.py
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from patrol_report.report_data import ReportData  # noqa: E402


@pytest.fixture
def data() -> ReportData:
    return ReportData()


@pytest.fixture
def complete_data() -> ReportData:
    """A report that passes every wizard step with no alerts"""
    return ReportData(
        guard_name="A. Kumar",
        patrol_start_time="18:00",
        patrol_end_time="06:00",
        hydrant_pressure="7.5",
        jockey_pump_runtime="60",
        tk13_level="15",
        tk29_level="16",
    )


class FakeGenerator:
    """Records payloads; returns `text` or raises `error`"""

    def __init__(self, text="Safety Status Report", error=None):
        self.text = text
        self.error = error
        self.payloads = []

    async def compose(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def make_generator():
    return FakeGenerator
