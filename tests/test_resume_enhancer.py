"""Tests for derived resume fields."""

import logging
from datetime import date

import pytest

from resume_builder.services.resume_defaults import apply_defaults
from resume_builder.services.resume_enhancer import (
    COMPUTED_KEY,
    analyze_sections,
    calculate_duration,
    calculate_total_experience,
    categorize_skills,
    enhance_resume,
    extract_profile_urls,
    format_date_range,
    format_display_date,
    format_duration,
    infer_skill_type,
    parse_resume_date,
)


@pytest.mark.parametrize("years, months, expected", [
    (2, 6, "2 years, 6 months"),
    (0, 3, "3 months"),
    (1, 0, "1 year"),
    (0, 0, "Less than a month"),
    (1, 1, "1 year, 1 month"),
])
def test_format_duration(years, months, expected):
    """Test duration formatting."""
    assert format_duration(years, months) == expected


def test_calculate_duration_near_year_edge():
    """Test almost three years stays two years and eleven months."""
    duration = calculate_duration("2020-01-01", "2022-12-31")

    assert duration["years"] == 2
    assert duration["months"] == 11
    assert duration["totalMonths"] == 35
    assert duration["humanReadable"] == "2 years, 11 months"


@pytest.mark.parametrize("start, end, total_months", [
    ("2021-01-01", "2022-01-01", 11),
    ("2021-01-01", "2022-01-02", 12),
    ("2020-01-01", "2021-01-01", 12),
    ("2021-01-01", "2021-01-31", 0),
])
def test_calculate_duration_floors_elapsed_months(start, end, total_months):
    """Test whole months are floored from 30.44-day averages."""
    assert calculate_duration(start, end)["totalMonths"] == total_months


def test_calendar_year_is_eleven_months():
    """Test a non-leap calendar year falls just short of twelve averaged months."""
    duration = calculate_duration("2021-01-01", "2022-01-01")

    assert duration["years"] == 0
    assert duration["humanReadable"] == "11 months"


@pytest.mark.parametrize("start, end", [
    ("invalid", "2022-01-01"),
    (None, "2022-01-01"),
    ("", None),
    ("2020-01-01", "someday"),
    (2020, "2022-01-01"),
])
def test_calculate_duration_invalid(start, end):
    """Test unparseable dates yield None."""
    assert calculate_duration(start, end) is None


def test_calculate_duration_partial_dates():
    """Test year and year-month dates."""
    assert calculate_duration("2019", "2021")["years"] == 2
    assert calculate_duration("2020-01", "2020-07")["totalMonths"] == 5


def test_calculate_duration_open_ended(clock):
    """Test missing and present end dates use the clock."""
    open_ended = calculate_duration("2023-01-01", None, clock)
    present = calculate_duration("2023-01-01", "Present", clock)

    assert open_ended == present
    assert open_ended["years"] == 1
    assert open_ended["months"] == 0


def test_parse_resume_date():
    """Test resume date parsing."""
    assert parse_resume_date("2020") == date(2020, 1, 1)
    assert parse_resume_date("2020-06") == date(2020, 6, 1)
    assert parse_resume_date("2020-06-15") == date(2020, 6, 15)
    assert parse_resume_date("2020-06-15T08:00:00Z") == date(2020, 6, 15)
    assert parse_resume_date("2020-13") is None
    assert parse_resume_date("June 2020") is None
    assert parse_resume_date(None) is None


def test_format_dates():
    """Test display formatting of dates and ranges."""
    assert format_display_date("2020-01-15") == "Jan 2020"
    assert format_display_date("sometime") == "sometime"
    assert format_display_date(None) == ""
    assert format_date_range("2020-01", "2022-12") == "Jan 2020 – Dec 2022"
    assert format_date_range("2020-01", None) == "Jan 2020 – Present"
    assert format_date_range("2020-01", "present") == "Jan 2020 – Present"
    assert format_date_range("", "2022-12") == ""


@pytest.mark.parametrize("keywords, expected", [
    (["Python", "Go"], "Programming Languages"),
    (["Django", "Flask"], "Frameworks & Libraries"),
    (["PostgreSQL"], "Databases"),
    (["Docker", "Kubernetes"], "Cloud & DevOps"),
    (["Public speaking"], "Other"),
    ([], "Other"),
])
def test_infer_skill_type(keywords, expected):
    """Test skill category inference."""
    assert infer_skill_type(keywords) == expected


def test_categorize_skills():
    """Test grouping skills by level and type."""
    skills = [
        {"name": "Backend", "level": "Expert", "keywords": ["Python"]},
        {"name": "Ops", "level": "Expert", "keywords": ["Docker"]},
        {"name": "Speaking"},
    ]

    categories = categorize_skills(skills)

    assert [skill["name"] for skill in categories["byLevel"]["Expert"]] == ["Backend", "Ops"]
    assert [skill["name"] for skill in categories["byLevel"]["Unspecified"]] == ["Speaking"]
    assert list(categories["byType"]) == ["Programming Languages", "Cloud & DevOps"]
    assert categories["all"] == skills
    assert categorize_skills(None) == {"byLevel": {}, "byType": {}, "all": []}


def test_calculate_total_experience(clock):
    """Test total experience sums whole months of every job."""
    work = [
        {"name": "A", "startDate": "2020-01-01", "endDate": "2021-01-01"},
        {"name": "B", "startDate": "2021-01-01", "endDate": "2021-07-01"},
        {"name": "C"},
    ]

    total = calculate_total_experience(work, clock)

    assert total["totalMonths"] == 17
    assert total["years"] == 1
    assert total["months"] == 5
    assert calculate_total_experience([], clock)["humanReadable"] == "Less than a month"


def test_extract_profile_urls():
    """Test profile URLs are keyed by lowercase network."""
    urls = extract_profile_urls([
        {"network": "GitHub", "url": "https://github.com/jane"},
        {"network": "Twitter"},
        "x",
    ])

    assert urls == {"github": "https://github.com/jane"}


def test_analyze_sections():
    """Test section analysis."""
    analysis = analyze_sections({
        "basics": {"name": "Jane", "email": ""},
        "work": [{"name": "A"}, {"name": "B"}],
        "skills": [],
        COMPUTED_KEY: {},
    })

    assert analysis["basics"] == {"exists": True, "isEmpty": False, "itemCount": 1, "type": "object"}
    assert analysis["work"]["itemCount"] == 2
    assert analysis["skills"]["isEmpty"] is True
    assert COMPUTED_KEY not in analysis


def test_enhance_resume(sample_resume, clock):
    """Test per-entry and document level derived fields."""
    original = apply_defaults(sample_resume, clock)
    enhanced = enhance_resume(original, clock)

    current, previous = enhanced["work"]
    assert current["isCurrentJob"] is True
    assert current["formattedDates"] == "Mar 2021 – Present"
    assert current["duration"]["years"] == 2
    assert previous["isCurrentJob"] is False
    assert previous["formattedDates"] == "Jun 2017 – Feb 2021"
    assert "isCurrentJob" not in enhanced["education"][0]
    assert enhanced["education"][0]["formattedDates"] == "Aug 2013 – May 2017"
    assert enhanced["projects"][0]["duration"] is not None

    computed = enhanced[COMPUTED_KEY]
    assert computed["profileUrls"]["github"] == "https://github.com/janedoe"
    assert computed["lastUpdated"] == "2024-01-15T12:00:00.000Z"
    assert computed["sections"]["work"]["itemCount"] == 2
    assert computed["totalWorkExperience"]["totalMonths"] == (
        current["duration"]["totalMonths"] + previous["duration"]["totalMonths"]
    )
    assert "Programming Languages" in computed["skillCategories"]["byType"]

    # input is not modified
    assert COMPUTED_KEY not in original
    assert "duration" not in original["work"][0]


def test_enhance_resume_keeps_existing_fields(clock):
    """Test derived entry fields never overwrite user data."""
    enhanced = enhance_resume({
        "work": [{"name": "A", "startDate": "2020", "duration": "custom", "isCurrentJob": False}]
    }, clock)

    job = enhanced["work"][0]
    assert job["duration"] == "custom"
    assert job["isCurrentJob"] is False
    assert job["formattedDates"] == "Jan 2020 – Present"


def test_enhance_resume_replaces_stale_computed(clock):
    """Test the computed block is always rebuilt."""
    enhanced = enhance_resume({COMPUTED_KEY: {"stale": True}, "work": []}, clock)

    assert "stale" not in enhanced[COMPUTED_KEY]
    assert COMPUTED_KEY not in enhanced[COMPUTED_KEY]["sections"]


def test_enhance_resume_logs_replaced_computed(clock, caplog):
    """Test replacing an existing computed block is logged."""
    with caplog.at_level(logging.WARNING, logger="resume_builder.services.resume_enhancer"):
        enhance_resume({COMPUTED_KEY: {"stale": True}}, clock)

    assert any(COMPUTED_KEY in record.getMessage() for record in caplog.records)


def test_enhance_resume_without_computed_does_not_warn(clock, caplog):
    """Test a normal document is enhanced silently."""
    with caplog.at_level(logging.WARNING, logger="resume_builder.services.resume_enhancer"):
        enhance_resume({"work": []}, clock)

    assert caplog.records == []


def test_skill_category_views_are_independent():
    """Test editing one skill view leaves the others and the input unchanged."""
    skills = [{"name": "Backend", "level": "Expert", "keywords": ["Python"]}]

    categories = categorize_skills(skills)
    categories["byLevel"]["Expert"][0]["name"] = "Changed"
    categories["byType"]["Programming Languages"][0]["keywords"].append("Go")
    categories["all"].append({"name": "Extra"})

    assert skills == [{"name": "Backend", "level": "Expert", "keywords": ["Python"]}]
    assert categories["all"][0]["name"] == "Backend"
    assert categories["byType"]["Programming Languages"][0]["name"] == "Backend"
    assert categories["byLevel"]["Expert"][0]["keywords"] == ["Python"]
