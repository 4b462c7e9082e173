"""Registry of the available resume templates."""

from typing import Dict, List, Optional
from pydantic import BaseModel

from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)


class TemplateInfo(BaseModel):
    """Resume template description."""
    
    id: str
    name: str
    description: str
    htmlFile: str
    features: List[str]
    recommended: List[str]


TEMPLATES: Dict[str, TemplateInfo] = {
    "minimal": TemplateInfo(
        id="minimal",
        name="Minimal",
        description="Ultra-clean, minimalist design focusing on content clarity",
        htmlFile="minimal.html",
        features=[
            "Ultra-clean typography",
            "Maximum white space",
            "Focus on content",
            "Minimal visual elements",
        ],
        recommended=["academia", "research", "creative", "freelance"],
    ),
    "classic": TemplateInfo(
        id="classic",
        name="Classic",
        description="Traditional, professional resume layout with clean typography",
        htmlFile="classic.html",
        features=[
            "Traditional two-column layout",
            "Professional typography",
            "Clear section headers",
            "Optimized for ATS systems",
        ],
        recommended=["corporate", "finance", "legal", "consulting"],
    ),
    "modern": TemplateInfo(
        id="modern",
        name="Modern",
        description="Contemporary design with subtle colors and modern typography",
        htmlFile="modern.html",
        features=[
            "Contemporary color scheme",
            "Modern typography stack",
            "Visual hierarchy emphasis",
            "Balanced white space",
        ],
        recommended=["tech", "design", "marketing", "startup"],
    ),
}

DEFAULT_TEMPLATE = "minimal"


def get_template(template_id: str) -> TemplateInfo:
    """
    Get a template by id.
    
    Args:
        template_id: Template identifier
        
    Returns:
        TemplateInfo: The template description
        
    Raises:
        ValueError: If the template does not exist
    """
    template = TEMPLATES.get(template_id)
    if template is None:
        raise ValueError(
            f"Unsupported template: {template_id}. Supported: {', '.join(TEMPLATES)}"
        )
    return template


def get_selected_template(template_id: Optional[str]) -> TemplateInfo:
    """
    Resolve the configured template, falling back to the default one.
    
    Args:
        template_id: Configured template identifier
        
    Returns:
        TemplateInfo: The selected or default template
    """
    template = TEMPLATES.get(template_id or DEFAULT_TEMPLATE)
    if template is None:
        logger.warning("Template %r not found, falling back to default", template_id)
        return TEMPLATES[DEFAULT_TEMPLATE]
    return template


def list_templates() -> List[TemplateInfo]:
    """Return all registered templates."""
    return list(TEMPLATES.values())
