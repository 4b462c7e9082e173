"""Response models for API endpoints."""

from typing import List
from pydantic import BaseModel, Field

from resume_builder.utils.template_registry import TemplateInfo


class ErrorResponse(BaseModel):
    """Error response model."""
    
    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        examples=["Unsupported template: fancy. Supported: minimal, classic, modern"]
    )


class HealthResponse(BaseModel):
    """Health check response model."""
    
    status: str = Field(
        ...,
        description="Service status",
        examples=["ok"]
    )


class RootResponse(BaseModel):
    """Root endpoint response model."""
    
    message: str = Field(
        ...,
        description="API name",
        examples=["JSON Resume Builder API"]
    )
    version: str = Field(
        ...,
        description="API version",
        examples=["1.0.0"]
    )


class SchemaInfoResponse(BaseModel):
    """Schema version information."""
    
    version: str = Field(..., description="Schema version", examples=["1.0.0"])
    name: str = Field(..., description="Schema name", examples=["JSON Resume Schema"])
    url: str = Field(..., description="Schema documentation URL")
    description: str = Field(..., description="Short schema description")


class TemplatesResponse(BaseModel):
    """Available templates and the configured default."""
    
    selected: str = Field(..., description="Template used when none is requested", examples=["minimal"])
    templates: List[TemplateInfo]
