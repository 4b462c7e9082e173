"""Tests for the processing pipeline."""

import pytest

from resume_builder.services.resume_enhancer import COMPUTED_KEY
from resume_builder.services.resume_processor import process_resume


def test_process_sample_resume(sample_resume, clock):
    """Test the full pipeline on a complete resume."""
    processed = process_resume(sample_resume, clock=clock, last_modified="2024-01-01T00:00:00.000Z")

    assert processed.validation.isValid is True
    assert processed.data["basics"]["name"] == "Jane Doe"
    assert COMPUTED_KEY in processed.data
    assert processed.metadata.loadedAt == "2024-01-15T12:00:00.000Z"
    assert processed.metadata.lastModified == "2024-01-01T00:00:00.000Z"
    assert processed.metadata.isValid is True
    assert processed.metadata.processingTimeMs >= 0


@pytest.mark.parametrize("value", [None, 42, "str", {}])
def test_process_garbage_input(value, clock):
    """Test garbage input is repaired into a valid document."""
    processed = process_resume(value, clock=clock)

    assert processed.validation.isValid is True
    assert processed.data["basics"]["name"] == "Resume"
    assert processed.data["work"] == []
    assert processed.metadata.hasWarnings is True


def test_validation_runs_on_repaired_document(clock):
    """Test repair happens before validation."""
    processed = process_resume({"basics": {"phone": 5551234}, "work": [{}, "x"]}, clock=clock)

    assert processed.validation.isValid is True
    assert processed.data["basics"]["phone"] == "5551234"


def test_structural_errors_are_reported(clock):
    """Test violations that repair does not touch still surface."""
    processed = process_resume({"skills": [{"name": "Python", "level": "SuperExpert"}]}, clock=clock)

    assert processed.validation.isValid is False
    assert processed.metadata.isValid is False
    assert processed.validation.errors[0].keyword == "enum"
    # enhancement still runs
    assert "Unspecified" not in processed.data[COMPUTED_KEY]["skillCategories"]["byLevel"]
    assert processed.data[COMPUTED_KEY]["skillCategories"]["byLevel"]["SuperExpert"]
