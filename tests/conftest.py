"""Shared fixtures for resume builder tests."""

import copy
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from resume_builder.utils.clock import fixed_clock

SAMPLE_PATH = Path(__file__).parent.parent / "resume_builder" / "data" / "sample.resume.json"
NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """Clock frozen at 2024-01-15 12:00 UTC."""
    return fixed_clock(NOW)


@pytest.fixture(scope="session")
def _sample_resume():
    with open(SAMPLE_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_resume(_sample_resume):
    """A fresh copy of the bundled sample resume."""
    return copy.deepcopy(_sample_resume)
