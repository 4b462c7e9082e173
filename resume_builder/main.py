"""FastAPI application for the JSON Resume Builder."""

from io import BytesIO
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Query, status
from fastapi.responses import HTMLResponse, StreamingResponse

from resume_builder.config import get_settings
from resume_builder.models.request_models import TemplateId
from resume_builder.models.response_models import (
    ErrorResponse,
    HealthResponse,
    RootResponse,
    SchemaInfoResponse,
    TemplatesResponse,
)
from resume_builder.models.validation_models import ProcessedResume, ValidationResult
from resume_builder.services.html_renderer import HTMLRenderer
from resume_builder.services.pdf_generator import PDFGenerator, generate_filename
from resume_builder.services.resume_data_loader import ResumeDataError, get_data_loader
from resume_builder.services.resume_processor import process_resume
from resume_builder.services.schema_validator import get_schema, get_schema_info, validate_resume
from resume_builder.utils.logger import get_logger, setup_logging
from resume_builder.utils.template_registry import get_selected_template, list_templates

API_VERSION = "1.0.0"

settings = get_settings()
setup_logging(settings.log_level, settings.log_file)
logger = get_logger(__name__)

app = FastAPI(
    title="JSON Resume Builder API",
    description="""API to validate, repair and render JSON Resume documents.

## Features

* **Validation**: Checks documents against JSON Resume Schema v1.0.0 with readable errors and quality warnings
* **Repair**: Fills missing sections and drops malformed entries so any template can render the result
* **Enhancement**: Adds durations, formatted date ranges, skill categories and total experience
* **Templates**: Renders HTML with the minimal, classic or modern template
* **PDF export**: Generates A4 PDFs with WeasyPrint

## Usage

1. Use `/api/v1/resume/validate` to check a document without changing it
2. Use `/api/v1/resume/process` to get the repaired, enhanced document with its validation result
3. Use `/api/v1/resume/render` or `/api/v1/resume/pdf` to produce HTML or PDF""",
    version=API_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    openapi_tags=[
        {
            "name": "health",
            "description": "Health check and status endpoints"
        },
        {
            "name": "schema",
            "description": "Schema and template introspection"
        },
        {
            "name": "resume",
            "description": "Validation, processing and rendering endpoints"
        }
    ]
)

# Initialize services
data_loader = get_data_loader()
html_renderer = HTMLRenderer()
pdf_generator = PDFGenerator(html_renderer)

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad request - Invalid input parameters",
        "model": ErrorResponse
    },
    404: {
        "description": "Not found - Resume file not found",
        "model": ErrorResponse
    },
    500: {
        "description": "Internal server error",
        "model": ErrorResponse
    }
}


def _template_id(template: Optional[TemplateId]) -> str:
    if template is not None:
        return template.value
    return get_selected_template(settings.template).id


def _load_stored_resume() -> ProcessedResume:
    try:
        return data_loader.load_and_process()
    except ResumeDataError as e:
        logger.error("Could not load resume data: %s (%s)", e, e.code)
        if e.code == "FILE_LOAD_ERROR":
            raise HTTPException(status_code=404, detail=str(e))
        if e.code == "JSON_PARSE_ERROR":
            raise HTTPException(status_code=400, detail=str(e))
        raise HTTPException(status_code=500, detail=str(e))


def _pdf_response(processed: ProcessedResume, template_id: str) -> StreamingResponse:
    try:
        pdf_bytes = pdf_generator.generate_pdf(processed, template_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("PDF generation failed")
        raise HTTPException(status_code=500, detail=f"Error generating PDF: {str(e)}")

    filename = generate_filename(processed.data, template_id)
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Resume-Valid": str(processed.validation.isValid).lower()
        }
    )


def _html_response(processed: ProcessedResume, template_id: str) -> HTMLResponse:
    try:
        html = html_renderer.generate_html(processed, template_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("HTML rendering failed")
        raise HTTPException(status_code=500, detail=f"Error rendering resume: {str(e)}")

    return HTMLResponse(
        content=html,
        headers={"X-Resume-Valid": str(processed.validation.isValid).lower()}
    )


@app.get(
    "/",
    response_model=RootResponse,
    status_code=status.HTTP_200_OK,
    summary="Root endpoint",
    description="Returns API information including name and version",
    tags=["health"]
)
async def root():
    """
    Root endpoint.

    Returns basic API information including name and version.
    """
    return RootResponse(message="JSON Resume Builder API", version=API_VERSION)


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Checks if the API service is running and healthy",
    tags=["health"]
)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/api/v1/schema",
    response_model=SchemaInfoResponse,
    summary="Schema information",
    description="Returns the version and origin of the schema resumes are validated against",
    tags=["schema"]
)
async def schema_info():
    """Return schema version information."""
    return SchemaInfoResponse(**get_schema_info())


@app.get(
    "/api/v1/schema/raw",
    summary="Raw schema",
    description="Returns the JSON Schema definition used for validation",
    tags=["schema"]
)
async def raw_schema():
    """Return the raw JSON Schema definition."""
    return get_schema()


@app.get(
    "/api/v1/templates",
    response_model=TemplatesResponse,
    summary="List templates",
    description="Returns the available resume templates and the configured default",
    tags=["schema"]
)
async def templates():
    """List the available templates."""
    return TemplatesResponse(
        selected=get_selected_template(settings.template).id,
        templates=list_templates()
    )


@app.post(
    "/api/v1/resume/validate",
    response_model=ValidationResult,
    summary="Validate resume",
    description="""
    Validates a resume document exactly as sent, without repairing it.

    Always answers 200: structural problems are reported in `errors`,
    content quality hints in `warnings`.
    """,
    tags=["resume"]
)
async def validate(resume: Any = Body(None, description="JSON Resume document")):
    """
    Validate a resume document.

    **Returns:**
    - `isValid`, human-readable `errors` and heuristic `warnings`
    """
    return validate_resume(resume)


@app.post(
    "/api/v1/resume/process",
    response_model=ProcessedResume,
    summary="Process resume",
    description="""
    Repairs, validates and enhances a resume document.

    **Process:**
    1. Fills missing sections and drops malformed entries
    2. Validates the repaired document against JSON Resume Schema v1.0.0
    3. Adds durations, formatted dates, skill categories and section metadata
    """,
    tags=["resume"]
)
async def process(resume: Any = Body(None, description="JSON Resume document")):
    """Run a resume document through the processing pipeline."""
    return process_resume(resume)


@app.post(
    "/api/v1/resume/render",
    response_class=HTMLResponse,
    summary="Render resume as HTML",
    description="Processes a resume document and renders it with the chosen template",
    tags=["resume"],
    responses=ERROR_RESPONSES
)
async def render(
    resume: Any = Body(None, description="JSON Resume document"),
    template: Optional[TemplateId] = Query(None, description="Template to render with")
):
    """Render a resume document as HTML."""
    return _html_response(process_resume(resume), _template_id(template))


@app.post(
    "/api/v1/resume/pdf",
    response_class=StreamingResponse,
    summary="Export resume as PDF",
    description="Processes a resume document and exports it as an A4 PDF",
    tags=["resume"],
    responses={
        200: {
            "description": "Resume PDF file",
            "content": {
                "application/pdf": {
                    "schema": {
                        "type": "string",
                        "format": "binary"
                    }
                }
            }
        },
        **ERROR_RESPONSES
    }
)
async def export_pdf(
    resume: Any = Body(None, description="JSON Resume document"),
    template: Optional[TemplateId] = Query(None, description="Template to render with")
):
    """
    Export a resume document as PDF.

    **Returns:**
    - PDF file as binary stream named `Name_Label_template_YYYY-MM-DD.pdf`
    """
    return _pdf_response(process_resume(resume), _template_id(template))


@app.get(
    "/api/v1/resume",
    response_model=ProcessedResume,
    summary="Stored resume",
    description="Loads the configured resume file (or the sample resume) and processes it",
    tags=["resume"],
    responses=ERROR_RESPONSES
)
async def stored_resume():
    """Return the processed stored resume."""
    return _load_stored_resume()


@app.get(
    "/api/v1/resume/html",
    response_class=HTMLResponse,
    summary="Render stored resume",
    description="Renders the configured resume file as HTML",
    tags=["resume"],
    responses=ERROR_RESPONSES
)
async def stored_resume_html(
    template: Optional[TemplateId] = Query(None, description="Template to render with")
):
    """Render the stored resume as HTML."""
    return _html_response(_load_stored_resume(), _template_id(template))


@app.get(
    "/api/v1/resume/pdf",
    response_class=StreamingResponse,
    summary="Export stored resume",
    description="Exports the configured resume file as an A4 PDF",
    tags=["resume"],
    responses=ERROR_RESPONSES
)
async def stored_resume_pdf(
    template: Optional[TemplateId] = Query(None, description="Template to render with")
):
    """Export the stored resume as PDF."""
    return _pdf_response(_load_stored_resume(), _template_id(template))
