"""Resume processing pipeline: repair, validate, enhance."""

import time
from typing import Any, Optional

from resume_builder.models.validation_models import ProcessedResume, ProcessingMetadata
from resume_builder.services.resume_defaults import apply_defaults
from resume_builder.services.resume_enhancer import enhance_resume
from resume_builder.services.schema_validator import SchemaValidator, get_schema_validator
from resume_builder.utils.clock import Clock, isoformat_utc, resolve_clock
from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)


def process_resume(
    raw_data: Any,
    clock: Optional[Clock] = None,
    last_modified: Optional[str] = None,
    validator: Optional[SchemaValidator] = None
) -> ProcessedResume:
    """
    Process raw resume data into an enhanced, validated document.

    Data problems never raise: they end up in the validation result or are
    repaired with defaults.

    Args:
        raw_data: Raw resume data of any shape
        clock: Source of the current time
        last_modified: Last modification timestamp of the source, if known
        validator: Schema validator. Defaults to the shared one.

    Returns:
        ProcessedResume: Enhanced data, validation result and metadata
    """
    clock = resolve_clock(clock)
    validator = validator or get_schema_validator()
    start = time.perf_counter()

    repaired = apply_defaults(raw_data, clock)
    validation = validator.validate_resume(repaired)
    enhanced = enhance_resume(repaired, clock)

    processing_time = round((time.perf_counter() - start) * 1000, 3)
    logger.info(
        "Resume processed in %sms (valid=%s, warnings=%d)",
        processing_time,
        validation.isValid,
        len(validation.warnings),
    )

    return ProcessedResume(
        data=enhanced,
        validation=validation,
        metadata=ProcessingMetadata(
            loadedAt=isoformat_utc(clock()),
            lastModified=last_modified,
            processingTimeMs=processing_time,
            isValid=validation.isValid,
            hasWarnings=validation.hasWarnings,
        ),
    )
