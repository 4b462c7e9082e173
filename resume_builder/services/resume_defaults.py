"""Default values and structural repair for resume documents."""

import copy
from typing import Any, Callable, Dict, List, Optional

from resume_builder.utils.clock import Clock, isoformat_utc, resolve_clock
from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_NAME = "Resume"

OBJECT_SECTIONS = ("basics", "meta")
ARRAY_SECTIONS = (
    "work",
    "volunteer",
    "education",
    "awards",
    "certificates",
    "publications",
    "skills",
    "languages",
    "interests",
    "references",
    "projects",
)

BASICS_STRING_FIELDS = ("name", "label", "image", "email", "phone", "url", "summary")

EntryPredicate = Callable[[Dict[str, Any]], bool]


def _has_any(*fields: str) -> EntryPredicate:
    """Predicate accepting entries with at least one truthy field."""
    return lambda entry: any(entry.get(field) for field in fields)


def _is_valid_skill(entry: Dict[str, Any]) -> bool:
    keywords = entry.get("keywords")
    return bool(entry.get("name")) or (isinstance(keywords, list) and len(keywords) > 0)


# Minimal content each array entry needs to survive repair
ENTRY_PREDICATES: Dict[str, EntryPredicate] = {
    "work": _has_any("name", "company", "organization"),
    "volunteer": _has_any("organization", "name"),
    "education": _has_any("institution", "area", "studyType"),
    "awards": _has_any("title"),
    "certificates": _has_any("name"),
    "publications": _has_any("name"),
    "skills": _is_valid_skill,
    "languages": _has_any("language"),
    "interests": _has_any("name"),
    "references": _has_any("name", "reference"),
    "projects": _has_any("name"),
}


def build_default_values(clock: Optional[Clock] = None) -> Dict[str, Any]:
    """
    Build the default value table.

    Args:
        clock: Source of the current time for meta.lastModified

    Returns:
        Dict[str, Any]: A fresh document with every known section
    """
    now = resolve_clock(clock)()
    defaults: Dict[str, Any] = {
        "basics": {
            "name": "",
            "label": "",
            "email": "",
            "phone": "",
            "summary": "",
            "location": {},
            "profiles": [],
        },
    }
    for section in ARRAY_SECTIONS:
        defaults[section] = []
    defaults["meta"] = {
        "canonical": "",
        "version": "1.0.0",
        "lastModified": isoformat_utc(now),
    }
    return defaults


def _to_text(value: Any) -> str:
    """Coerce a scalar to text. Containers and None become ''."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return ""


def repair_entries(section: str, entries: List[Any]) -> List[Dict[str, Any]]:
    """
    Drop entries that are not objects or lack the section's minimal content.

    Args:
        section: Section name used to pick the predicate
        entries: Entries of the section

    Returns:
        List[Dict[str, Any]]: Surviving entries in their original order
    """
    predicate = ENTRY_PREDICATES.get(section)
    kept = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if predicate is not None and not predicate(entry):
            continue
        kept.append(entry)

    dropped = len(entries) - len(kept)
    if dropped:
        logger.warning("Dropped %d invalid %s entries", dropped, section)
    return kept


def repair_basics(basics: Dict[str, Any]) -> Dict[str, Any]:
    """
    Repair the basics section.

    Args:
        basics: Basics merged with defaults

    Returns:
        Dict[str, Any]: Basics with text fields, location and profiles fixed
    """
    repaired = dict(basics)

    for field in BASICS_STRING_FIELDS:
        if field in repaired and not isinstance(repaired[field], str):
            repaired[field] = _to_text(repaired[field])

    if not isinstance(repaired.get("location"), dict):
        repaired["location"] = {}

    profiles = repaired.get("profiles")
    if not isinstance(profiles, list):
        profiles = []
    repaired["profiles"] = [
        profile for profile in profiles
        if isinstance(profile, dict) and (profile.get("network") or profile.get("url"))
    ]

    return repaired


def _merge_sections(data: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(data)

    for section, default in defaults.items():
        value = result.get(section)

        if isinstance(default, dict):
            # user keys win over defaults
            result[section] = {**default, **value} if isinstance(value, dict) else copy.deepcopy(default)
        elif value is None:
            result[section] = []
        else:
            entries = value if isinstance(value, list) else [value]
            result[section] = repair_entries(section, entries)

    result["basics"] = repair_basics(result["basics"])
    return _ensure_name(result)


def _ensure_name(document: Dict[str, Any]) -> Dict[str, Any]:
    if not document["basics"].get("name"):
        document["basics"]["name"] = FALLBACK_NAME
    return document


def apply_defaults(data: Any, clock: Optional[Clock] = None) -> Dict[str, Any]:
    """
    Apply default values and repair the structure of resume data.

    Never raises. Non-object input, and any failure during repair, yield a
    fresh default document.

    Args:
        data: Raw resume data of any shape
        clock: Source of the current time for meta.lastModified

    Returns:
        Dict[str, Any]: A new document with every known section present
    """
    defaults = build_default_values(clock)

    if not isinstance(data, dict):
        logger.warning("Invalid resume data of type %s, using defaults", type(data).__name__)
        return _ensure_name(defaults)

    try:
        return _merge_sections(data, defaults)
    except Exception:
        logger.exception("Resume repair failed, falling back to defaults")
        return _ensure_name(build_default_values(clock))
