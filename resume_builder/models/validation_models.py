"""Pydantic models for validation and processing results."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["low", "medium", "high"]


class ErrorRecord(BaseModel):
    """A single structural schema violation."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    path: str = ""
    property_name: str = Field(default="", alias="property")
    message: str
    value: Any = None
    allowedValues: Any = None
    keyword: str


class WarningRecord(BaseModel):
    """Heuristic, non-blocking content quality warning."""
    
    type: str
    message: str
    severity: Severity


class ValidationResult(BaseModel):
    """Outcome of validating one resume document."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    isValid: bool
    errors: List[ErrorRecord] = Field(default_factory=list)
    warnings: List[WarningRecord] = Field(default_factory=list)
    validationTime: float = 0.0
    schemaVersion: str
    schema_name: str = Field(default="JSON Resume Schema v1.0.0", alias="schema")
    
    @property
    def hasWarnings(self) -> bool:
        """Whether any heuristic warning was produced."""
        return len(self.warnings) > 0


class ProcessingMetadata(BaseModel):
    """Metadata describing one pipeline run."""
    
    loadedAt: str
    lastModified: Optional[str] = None
    processingTimeMs: float
    isValid: bool
    hasWarnings: bool


class ProcessedResume(BaseModel):
    """Enhanced data, its validation result and processing metadata."""
    
    data: Dict[str, Any]
    validation: ValidationResult
    metadata: ProcessingMetadata
