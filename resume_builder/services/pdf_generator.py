"""Service for generating PDF from HTML."""

import re
from datetime import date
from typing import Any, Dict, Optional

from resume_builder.models.validation_models import ProcessedResume
from resume_builder.services.html_renderer import HTMLRenderer
from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)

PAGE_CSS = """
    @page {
        size: A4;
        margin: 0.5in;
    }
"""


class PDFGenerator:
    """Service to generate PDF from HTML using WeasyPrint."""
    
    def __init__(self, html_renderer: Optional[HTMLRenderer] = None):
        """
        Initialize the PDF generator.
        
        Args:
            html_renderer: HTML renderer instance. If None, creates a new one.
        """
        if html_renderer is None:
            html_renderer = HTMLRenderer()
        self.html_renderer = html_renderer
    
    def generate_pdf(self, processed: ProcessedResume, template_id: str) -> bytes:
        """
        Generate PDF from processed resume data.
        
        Args:
            processed: Output of the processing pipeline
            template_id: Template identifier
            
        Returns:
            bytes: PDF file as bytes
        """
        # WeasyPrint loads native libraries on import
        from weasyprint import HTML as WeasyHTML, CSS
        
        # Generate HTML first
        html_content = self.html_renderer.generate_html(processed, template_id)
        
        html = WeasyHTML(string=html_content, base_url=str(self.html_renderer.template_dir))
        
        # A4 portrait page settings
        page_css = CSS(string=PAGE_CSS)
        
        pdf_bytes = html.write_pdf(stylesheets=[page_css])
        logger.info("PDF generated with template %s (%d bytes)", template_id, len(pdf_bytes))
        
        return pdf_bytes


def _clean_filename_part(text: str) -> str:
    return re.sub(r"\s+", "_", re.sub(r"[^a-zA-Z0-9\s]", "", text).strip())


def generate_filename(
    data: Dict[str, Any],
    template_id: str = "",
    today: Optional[date] = None
) -> str:
    """
    Generate a PDF filename from resume data.
    
    Example: "Jane Doe", "Software Engineer", "modern" -> "Jane_Doe_Software_Engineer_modern_2024-05-01.pdf"
    
    Args:
        data: Resume data
        template_id: Template identifier to include
        today: Date stamp. Defaults to today.
        
    Returns:
        str: Filename containing only letters, digits, underscores and the date
    """
    basics = data.get("basics") or {}
    name = _clean_filename_part(str(basics.get("name") or "")) or "Resume"
    label = _clean_filename_part(str(basics.get("label") or ""))
    stamp = (today or date.today()).isoformat()
    
    filename = name
    if label:
        filename += f"_{label}"
    if template_id:
        filename += f"_{template_id}"
    
    return f"{filename}_{stamp}.pdf"
