"""Service for generating resume HTML from templates."""

import re
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from resume_builder.models.validation_models import ProcessedResume
from resume_builder.utils.logger import get_logger
from resume_builder.utils.template_helpers import register_jinja_filters
from resume_builder.utils.template_registry import TEMPLATES, TemplateInfo, get_template

logger = get_logger(__name__)


class HTMLRenderer:
    """Service to render enhanced resume data with Jinja2 templates."""
    
    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the HTML renderer.
        
        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to resume_builder/templates/
        """
        if template_dir is None:
            # Package directory (parent of services)
            package_dir = Path(__file__).parent.parent
            template_dir = package_dir / "templates"
        
        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )
        
        # Register custom filters
        register_jinja_filters(self.env)
    
    def generate_html(self, processed: ProcessedResume, template_id: str) -> str:
        """
        Generate resume HTML from a template.
        
        Args:
            processed: Output of the processing pipeline
            template_id: Template identifier ('minimal', 'classic' or 'modern')
            
        Returns:
            str: Rendered HTML string
            
        Raises:
            ValueError: If the template does not exist
        """
        template_info = get_template(template_id)
        data = processed.data
        
        template_data = {
            "data": data,
            "basics": data.get("basics", {}),
            "computed": data.get("_computed", {}),
            "validation": processed.validation,
            "template": template_info,
            "title": document_title(data),
        }
        
        template = self.env.get_template(template_info.htmlFile)
        html = template.render(**template_data)
        
        logger.info("Template rendered successfully: %s", template_info.name)
        return html
    
    def available_templates(self) -> Dict[str, TemplateInfo]:
        """Return templates whose HTML file exists in the template directory."""
        return {
            template_id: info for template_id, info in TEMPLATES.items()
            if (self.template_dir / info.htmlFile).exists()
        }


def document_title(data: Dict[str, Any]) -> str:
    """
    Build the HTML document title.
    
    Example: name "Jane Doe" and meta.prospect "Acme Corp" -> "Jane_Doe_Resume_Acme_Corp"
    
    Args:
        data: Resume data
        
    Returns:
        str: Title with whitespace replaced by underscores
    """
    basics = data.get("basics") or {}
    meta = data.get("meta") or {}
    name = re.sub(r"\s+", "_", str(basics.get("name") or "Resume"))
    prospect = re.sub(r"\s+", "_", str(meta.get("prospect") or ""))
    return f"{name}_Resume_{prospect}" if prospect else f"{name}_Resume"
