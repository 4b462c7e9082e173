"""Request models for API endpoints."""

from enum import Enum


class TemplateId(str, Enum):
    """Supported resume templates."""
    
    MINIMAL = "minimal"
    CLASSIC = "classic"
    MODERN = "modern"
