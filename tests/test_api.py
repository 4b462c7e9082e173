"""Tests for FastAPI endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from resume_builder.main import app


def _weasyprint_available():
    try:
        import weasyprint  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


requires_weasyprint = pytest.mark.skipif(
    not _weasyprint_available(),
    reason="WeasyPrint native libraries are not installed"
)


def _client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_root_endpoint():
    """Test root endpoint."""
    async with _client() as client:
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "JSON Resume Builder API", "version": "1.0.0"}


@pytest.mark.asyncio
async def test_health_endpoint():
    """Test health endpoint."""
    async with _client() as client:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_schema_endpoints():
    """Test schema introspection endpoints."""
    async with _client() as client:
        info = await client.get("/api/v1/schema")
        raw = await client.get("/api/v1/schema/raw")

    assert info.status_code == 200
    assert info.json()["version"] == "1.0.0"
    assert raw.status_code == 200
    assert "basics" in raw.json()["properties"]


@pytest.mark.asyncio
async def test_templates_endpoint():
    """Test template listing."""
    async with _client() as client:
        response = await client.get("/api/v1/templates")

    body = response.json()
    assert response.status_code == 200
    assert body["selected"] == "minimal"
    assert [template["id"] for template in body["templates"]] == ["minimal", "classic", "modern"]


@pytest.mark.asyncio
async def test_validate_endpoint_reports_errors():
    """Test validation of a raw document without repair."""
    async with _client() as client:
        response = await client.post(
            "/api/v1/resume/validate",
            json={"skills": [{"name": "Python", "level": "SuperExpert"}]}
        )

    body = response.json()
    assert response.status_code == 200
    assert body["isValid"] is False
    assert body["errors"][0]["keyword"] == "enum"
    assert body["errors"][0]["property"] == "level"
    assert body["schema"] == "JSON Resume Schema v1.0.0"


@pytest.mark.asyncio
async def test_validate_endpoint_non_object():
    """Test non-object bodies are validation errors, not server errors."""
    async with _client() as client:
        response = await client.post("/api/v1/resume/validate", json=[1, 2, 3])

    assert response.status_code == 200
    assert response.json()["isValid"] is False


@pytest.mark.asyncio
async def test_process_endpoint(sample_resume):
    """Test the processing pipeline over HTTP."""
    async with _client() as client:
        response = await client.post("/api/v1/resume/process", json=sample_resume)

    body = response.json()
    assert response.status_code == 200
    assert body["validation"]["isValid"] is True
    assert body["metadata"]["isValid"] is True
    assert body["data"]["_computed"]["profileUrls"]["github"] == "https://github.com/janedoe"
    assert body["data"]["work"][0]["isCurrentJob"] is True


@pytest.mark.asyncio
async def test_process_endpoint_repairs_empty_body():
    """Test an empty object is repaired into a full document."""
    async with _client() as client:
        response = await client.post("/api/v1/resume/process", json={})

    body = response.json()
    assert body["data"]["basics"]["name"] == "Resume"
    assert body["metadata"]["hasWarnings"] is True


@pytest.mark.asyncio
async def test_render_endpoint(sample_resume):
    """Test HTML rendering with a chosen template."""
    async with _client() as client:
        response = await client.post("/api/v1/resume/render?template=classic", json=sample_resume)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["x-resume-valid"] == "true"
    assert "resume-container classic" in response.text


@pytest.mark.asyncio
async def test_render_endpoint_invalid_template(sample_resume):
    """Test rendering with an unknown template."""
    async with _client() as client:
        response = await client.post("/api/v1/resume/render?template=fancy", json=sample_resume)

    assert response.status_code == 422  # Validation error


@pytest.mark.asyncio
async def test_stored_resume_endpoints():
    """Test the stored resume falls back to the bundled sample."""
    async with _client() as client:
        data = await client.get("/api/v1/resume")
        html = await client.get("/api/v1/resume/html?template=modern")

    assert data.status_code == 200
    assert data.json()["data"]["basics"]["name"] == "Jane Doe"
    assert html.status_code == 200
    assert "resume-container modern" in html.text


@requires_weasyprint
@pytest.mark.asyncio
async def test_pdf_endpoint(sample_resume):
    """Test PDF export."""
    async with _client() as client:
        response = await client.post("/api/v1/resume/pdf?template=modern", json=sample_resume)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "Jane_Doe_Senior_Software_Engineer_modern_" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")
