"""Derived fields computed on top of repaired resume data."""

import copy
import math
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from resume_builder.utils.clock import Clock, isoformat_utc, resolve_clock
from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)

COMPUTED_KEY = "_computed"
AVERAGE_DAYS_PER_MONTH = 30.44
PRESENT = "present"
DATE_RANGE_SEPARATOR = " – "

DATED_SECTIONS = ("work", "education", "volunteer", "projects")

# Checked in order; the first table with a matching keyword wins
SKILL_TYPE_KEYWORDS = {
    "Programming Languages": [
        "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "php",
        "golang", "rust", "swift", "kotlin", "scala", "perl", "haskell", "elixir",
    ],
    "Frameworks & Libraries": [
        "react", "angular", "vue", "svelte", "django", "flask", "fastapi", "spring",
        "express", "rails", "laravel", "node.js", "next.js", ".net", "jquery",
    ],
    "Databases": [
        "mysql", "postgresql", "postgres", "mongodb", "redis", "sqlite", "oracle",
        "cassandra", "dynamodb", "elasticsearch", "mariadb", "sql",
    ],
    "Cloud & DevOps": [
        "aws", "azure", "gcp", "google cloud", "docker", "kubernetes", "terraform",
        "jenkins", "ansible", "ci/cd", "heroku", "ec2", "s3", "lambda",
    ],
}
OTHER_SKILL_TYPE = "Other"
UNSPECIFIED_LEVEL = "Unspecified"

_PARTIAL_DATE = re.compile(r"(?P<year>\d{4})(?:-(?P<month>\d{2})(?:-(?P<day>\d{2}))?)?")


def parse_resume_date(value: Any) -> Optional[date]:
    """
    Parse a resume date.

    Accepts YYYY, YYYY-MM, YYYY-MM-DD and ISO datetimes. Missing parts default
    to the first month or day.

    Args:
        value: Date string

    Returns:
        Optional[date]: Parsed date, or None when the value is not a date
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    match = _PARTIAL_DATE.fullmatch(text)
    try:
        if match:
            return date(
                int(match.group("year")),
                int(match.group("month") or 1),
                int(match.group("day") or 1),
            )
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _is_open_ended(end_date: Any) -> bool:
    return not end_date or (isinstance(end_date, str) and end_date.strip().lower() == PRESENT)


def format_duration(years: int, months: int) -> str:
    """
    Format a duration for display.

    Args:
        years: Whole years
        months: Remaining months

    Returns:
        str: e.g. "2 years, 6 months", "1 year" or "Less than a month"
    """
    parts = []
    if years > 0:
        parts.append(f"{years} year{'s' if years > 1 else ''}")
    if months > 0:
        parts.append(f"{months} month{'s' if months > 1 else ''}")
    return ", ".join(parts) if parts else "Less than a month"


def _duration_from_months(total_months: int) -> Dict[str, Any]:
    years, months = divmod(total_months, 12)
    return {
        "years": years,
        "months": months,
        "totalMonths": total_months,
        "humanReadable": format_duration(years, months),
    }


def calculate_duration(
    start_date: Any,
    end_date: Any = None,
    clock: Optional[Clock] = None
) -> Optional[Dict[str, Any]]:
    """
    Calculate the duration between two resume dates.

    A missing or "present" end date means now. Months are whole elapsed
    months of 30.44 days.

    Args:
        start_date: Start date string
        end_date: End date string, "present" or None
        clock: Source of the current time

    Returns:
        Optional[Dict[str, Any]]: years, months, totalMonths and humanReadable,
        or None when a date cannot be parsed
    """
    start = parse_resume_date(start_date)
    if start is None:
        return None

    if _is_open_ended(end_date):
        end = resolve_clock(clock)().date()
    else:
        end = parse_resume_date(end_date)
        if end is None:
            return None

    days = abs((end - start).days)
    return _duration_from_months(math.floor(days / AVERAGE_DAYS_PER_MONTH))


def format_display_date(value: Any) -> str:
    """Format a resume date as an abbreviated month and year, e.g. "Jan 2020"."""
    parsed = parse_resume_date(value)
    if parsed is None:
        return value if isinstance(value, str) else ""
    return parsed.strftime("%b %Y")


def format_date_range(start_date: Any, end_date: Any = None) -> str:
    """
    Format a date range for display.

    Args:
        start_date: Start date string
        end_date: End date string, "present" or None

    Returns:
        str: e.g. "Jan 2020 – Dec 2022" or "Jan 2020 – Present"; empty when
        the start date is missing or invalid
    """
    if parse_resume_date(start_date) is None:
        return ""

    start = format_display_date(start_date)
    end = "Present" if _is_open_ended(end_date) else format_display_date(end_date)
    return f"{start}{DATE_RANGE_SEPARATOR}{end}"


def infer_skill_type(keywords: Sequence[Any]) -> str:
    """
    Infer a skill category from its keywords.

    Args:
        keywords: Skill keywords

    Returns:
        str: Category name, "Other" when nothing matches
    """
    joined = " ".join(str(keyword) for keyword in keywords).lower()
    for skill_type, table in SKILL_TYPE_KEYWORDS.items():
        if any(term in joined for term in table):
            return skill_type
    return OTHER_SKILL_TYPE


def categorize_skills(skills: Any) -> Dict[str, Any]:
    """
    Group skills by level and by inferred type.

    Every view holds its own copies, so editing one never changes another
    or the input.

    Args:
        skills: Skill entries

    Returns:
        Dict[str, Any]: byLevel, byType and all
    """
    if not isinstance(skills, list):
        return {"byLevel": {}, "byType": {}, "all": []}

    by_level: Dict[str, List[Dict[str, Any]]] = {}
    by_type: Dict[str, List[Dict[str, Any]]] = {}

    for skill in skills:
        if not isinstance(skill, dict):
            continue
        level = skill.get("level") or UNSPECIFIED_LEVEL
        by_level.setdefault(str(level), []).append(copy.deepcopy(skill))

        keywords = skill.get("keywords")
        if isinstance(keywords, list) and keywords:
            by_type.setdefault(infer_skill_type(keywords), []).append(copy.deepcopy(skill))

    return {"byLevel": by_level, "byType": by_type, "all": copy.deepcopy(skills)}


def calculate_total_experience(work: Any, clock: Optional[Clock] = None) -> Dict[str, Any]:
    """
    Sum the duration of all work entries.

    Args:
        work: Work entries
        clock: Source of the current time for ongoing jobs

    Returns:
        Dict[str, Any]: totalMonths, years, months and humanReadable
    """
    total_months = 0
    for job in work if isinstance(work, list) else []:
        if not isinstance(job, dict):
            continue
        duration = calculate_duration(job.get("startDate"), job.get("endDate"), clock)
        if duration is not None:
            total_months += duration["totalMonths"]

    return _duration_from_months(total_months)


def extract_profile_urls(profiles: Any) -> Dict[str, str]:
    """
    Index profile URLs by lowercase network name.

    Args:
        profiles: basics.profiles entries

    Returns:
        Dict[str, str]: e.g. {"github": "https://github.com/jane"}
    """
    urls: Dict[str, str] = {}
    for profile in profiles if isinstance(profiles, list) else []:
        if isinstance(profile, dict) and profile.get("network") and profile.get("url"):
            urls[str(profile["network"]).lower()] = profile["url"]
    return urls


def _count_items(value: Any) -> int:
    if isinstance(value, list):
        return len(value)
    if isinstance(value, dict):
        return sum(1 for item in value.values() if item not in (None, "", [], {}))
    return 0 if value in (None, "") else 1


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def analyze_sections(document: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Describe the presence and size of each top-level section.

    Args:
        document: Resume document

    Returns:
        Dict[str, Dict[str, Any]]: exists, isEmpty, itemCount and type per section
    """
    analysis = {}
    for section, value in document.items():
        if section == COMPUTED_KEY:
            continue
        item_count = _count_items(value)
        analysis[section] = {
            "exists": value is not None,
            "isEmpty": item_count == 0,
            "itemCount": item_count,
            "type": _json_type(value),
        }
    return analysis


def _enhance_entry(section: str, entry: Dict[str, Any], clock: Clock) -> Dict[str, Any]:
    enhanced = dict(entry)
    start, end = entry.get("startDate"), entry.get("endDate")
    enhanced.setdefault("duration", calculate_duration(start, end, clock))
    enhanced.setdefault("formattedDates", format_date_range(start, end))
    if section == "work":
        enhanced.setdefault("isCurrentJob", _is_open_ended(end))
    return enhanced


def enhance_resume(document: Dict[str, Any], clock: Optional[Clock] = None) -> Dict[str, Any]:
    """
    Add derived fields to repaired resume data.

    Only adds data: per-entry fields are set when absent, and the rest goes
    under the reserved "_computed" key.

    Args:
        document: Repaired resume document
        clock: Source of the current time

    Returns:
        Dict[str, Any]: A new, enhanced document
    """
    clock = resolve_clock(clock)
    enhanced = copy.deepcopy(document) if isinstance(document, dict) else {}

    for section in DATED_SECTIONS:
        entries = enhanced.get(section)
        if isinstance(entries, list):
            enhanced[section] = [
                _enhance_entry(section, entry, clock) if isinstance(entry, dict) else entry
                for entry in entries
            ]

    if COMPUTED_KEY in enhanced:
        logger.warning("Replacing existing %s block with freshly derived fields", COMPUTED_KEY)

    basics = enhanced.get("basics")
    profiles = basics.get("profiles") if isinstance(basics, dict) else None

    enhanced[COMPUTED_KEY] = {
        "totalWorkExperience": calculate_total_experience(enhanced.get("work"), clock),
        "skillCategories": categorize_skills(enhanced.get("skills")),
        "profileUrls": extract_profile_urls(profiles),
        "sections": analyze_sections(enhanced),
        "lastUpdated": isoformat_utc(clock()),
    }

    logger.debug("Resume enhanced with %d sections", len(enhanced[COMPUTED_KEY]["sections"]))
    return enhanced
