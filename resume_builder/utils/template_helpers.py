"""Helper functions for Jinja2 templates."""

import re
from typing import Any
from urllib.parse import urlparse

from jinja2 import Environment

from resume_builder.models.resume_schema import SKILL_LEVELS
from resume_builder.services.resume_enhancer import format_date_range, format_display_date


def domain(url: Any) -> str:
    """
    Extract the host name of a URL for display.
    
    Example: "https://www.github.com/jane" -> "github.com"
    
    Args:
        url: URL string
        
    Returns:
        str: Host without "www.", or the input when it is not a URL
    """
    if not url:
        return ""
    try:
        host = urlparse(str(url)).netloc
    except ValueError:
        return str(url)
    if not host:
        return str(url)
    return re.sub(r"^www\.", "", host)


def join_list(items: Any, separator: str = ", ") -> str:
    """Join list items for display, ignoring anything that is not a list."""
    if not isinstance(items, list):
        return ""
    texts = (str(item) for item in items if item is not None)
    return separator.join(text for text in texts if text)


def skill_level_number(level: Any) -> int:
    """
    Convert a skill level to a 1-5 scale for level bars.
    
    Args:
        level: Skill level such as "Expert"
        
    Returns:
        int: 1 (Beginner/Novice) to 5 (Master), 0 when unknown
    """
    if not isinstance(level, str):
        return 0
    normalized = [value.lower() for value in SKILL_LEVELS]
    try:
        index = normalized.index(level.lower())
    except ValueError:
        return 0
    # Beginner and Novice share the lowest step
    return max(1, index)


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.
    
    Args:
        env: Jinja2 Environment instance
    """
    env.filters['format_date'] = format_display_date
    env.filters['format_date_range'] = format_date_range
    env.filters['domain'] = domain
    env.filters['join_list'] = join_list
    env.filters['skill_level_number'] = skill_level_number
