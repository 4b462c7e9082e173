"""Service for validating resume data against the JSON Resume schema."""

import copy
import re
import time
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional

from jsonschema import FormatChecker, ValidationError
from jsonschema.validators import validator_for
from pydantic import AnyUrl, EmailStr, TypeAdapter

from resume_builder.models.resume_schema import (
    RESUME_SCHEMA,
    SCHEMA_DESCRIPTION,
    SCHEMA_NAME,
    SCHEMA_URL,
    SCHEMA_VERSION,
    SKILL_LEVELS,
)
from resume_builder.models.validation_models import ErrorRecord, ValidationResult, WarningRecord
from resume_builder.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_LABEL = f"{SCHEMA_NAME} v{SCHEMA_VERSION}"
MIN_SUMMARY_LENGTH = 50

FLEXIBLE_DATE_PATTERN = re.compile(r"(?P<year>\d{4})(?:-(?P<month>\d{2})(?:-(?P<day>\d{2}))?)?")
_REQUIRED_PATTERN = re.compile(r"^'(?P<name>.+)' is a required property")
_UNEXPECTED_PATTERN = re.compile(r"\((?P<extras>.*) (?:was|were) unexpected\)")

_EMAIL = TypeAdapter(EmailStr)
_URL = TypeAdapter(AnyUrl)
_DATE_TIME = TypeAdapter(datetime)


def build_format_checker() -> FormatChecker:
    """
    Build the format checker used for resume documents.

    Email, URI and date-time values are checked with pydantic types. Dates
    accept YYYY, YYYY-MM and YYYY-MM-DD but must name a real calendar day.
    Empty strings pass every check because the defaults table fills string
    fields with "".

    Returns:
        FormatChecker: Checker for date, email, uri and date-time
    """
    checker = FormatChecker(formats=())

    @checker.checks("date", raises=ValueError)
    def is_flexible_date(value: Any) -> bool:
        if not isinstance(value, str) or value == "":
            return True
        match = FLEXIBLE_DATE_PATTERN.fullmatch(value)
        if match is None:
            return False
        date(
            int(match.group("year")),
            int(match.group("month") or 1),
            int(match.group("day") or 1),
        )
        return True

    @checker.checks("email", raises=ValueError)
    def is_email(value: Any) -> bool:
        if not isinstance(value, str) or value == "":
            return True
        _EMAIL.validate_python(value)
        return True

    @checker.checks("uri", raises=ValueError)
    def is_uri(value: Any) -> bool:
        if not isinstance(value, str) or value == "":
            return True
        _URL.validate_python(value)
        return True

    @checker.checks("date-time", raises=ValueError)
    def is_date_time(value: Any) -> bool:
        if not isinstance(value, str) or value == "":
            return True
        _DATE_TIME.validate_python(value)
        return True

    return checker


def json_type_name(value: Any) -> str:
    """Name the JSON type of a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _known(value: Any) -> Any:
    # jsonschema marks attributes it was not given with an "Unset" sentinel
    return None if type(value).__name__ == "Unset" else value


class SchemaValidator:
    """Validate resume documents and explain violations in plain language."""

    def __init__(
        self,
        schema: Optional[Dict[str, Any]] = None,
        format_checker: Optional[FormatChecker] = None
    ):
        """
        Compile the schema.

        Args:
            schema: Schema to validate against. Defaults to the JSON Resume schema.
            format_checker: Format checker. Defaults to build_format_checker().

        Raises:
            jsonschema.SchemaError: If the schema itself is invalid
        """
        self.schema = schema if schema is not None else RESUME_SCHEMA
        validator_cls = validator_for(self.schema)
        validator_cls.check_schema(self.schema)
        self._validator = validator_cls(
            self.schema,
            format_checker=format_checker or build_format_checker()
        )
        logger.debug("Schema validator compiled with %s", validator_cls.__name__)

    def validate_resume(self, resume_data: Any) -> ValidationResult:
        """
        Validate resume data.

        Never raises: an internal failure is reported as a single synthetic
        error record.

        Args:
            resume_data: Any value, usually the repaired resume document

        Returns:
            ValidationResult: Validity flag, errors and warnings
        """
        start = time.perf_counter()

        try:
            errors = self.format_errors(self._validator.iter_errors(resume_data))
            warnings = self.generate_warnings(resume_data)
        except Exception as e:
            logger.exception("Schema validation raised unexpectedly")
            return ValidationResult(
                isValid=False,
                errors=[
                    ErrorRecord(
                        path="",
                        property="",
                        message=f"Schema validation failed: {e}",
                        value=None,
                        keyword="validation-error",
                    )
                ],
                warnings=[],
                validationTime=0.0,
                schemaVersion=SCHEMA_VERSION,
                schema=SCHEMA_LABEL,
            )

        elapsed_ms = round((time.perf_counter() - start) * 1000, 3)
        result = ValidationResult(
            isValid=not errors,
            errors=errors,
            warnings=warnings,
            validationTime=elapsed_ms,
            schemaVersion=SCHEMA_VERSION,
            schema=SCHEMA_LABEL,
        )

        if result.isValid:
            logger.info("Resume validation passed in %sms", elapsed_ms)
        else:
            logger.warning("Resume validation failed with %d errors", len(errors))

        return result

    def format_errors(self, errors: Optional[Iterable[ValidationError]]) -> List[ErrorRecord]:
        """
        Convert raw jsonschema errors into error records.

        Args:
            errors: Raw validation errors

        Returns:
            List[ErrorRecord]: One record per violation
        """
        if not errors:
            return []

        records = []
        for error in errors:
            segments = [str(part) for part in error.absolute_path]
            records.append(
                ErrorRecord(
                    path="/" + "/".join(segments) if segments else "",
                    property=segments[-1] if segments else "",
                    message=self.get_human_readable_message(error),
                    value=_known(error.instance),
                    allowedValues=_known(error.validator_value),
                    keyword=str(_known(error.validator) or "unknown"),
                )
            )
        return records

    def get_human_readable_message(self, error: ValidationError) -> str:
        """
        Build a human-readable message for one violation.

        Args:
            error: Raw jsonschema error

        Returns:
            str: Message naming the offending property
        """
        segments = [str(part) for part in error.absolute_path]
        prop = segments[-1] if segments else "data"
        keyword = _known(error.validator)
        expected = _known(error.validator_value)

        if keyword == "required":
            match = _REQUIRED_PATTERN.match(error.message or "")
            missing = match.group("name") if match else ", ".join(map(str, expected or []))
            return f"Missing required property: {missing}"
        if keyword == "type":
            if isinstance(expected, (list, tuple)):
                expected = " or ".join(map(str, expected))
            return f"Property '{prop}' should be {expected}, but got {json_type_name(_known(error.instance))}"
        if keyword == "format":
            return f"Property '{prop}' has invalid format. Expected: {expected}"
        if keyword == "enum":
            allowed = ", ".join(map(str, expected or []))
            return f"Property '{prop}' must be one of: {allowed}"
        if keyword == "minItems":
            return f"Array '{prop}' should have at least {expected} items"
        if keyword == "maxItems":
            return f"Array '{prop}' should have no more than {expected} items"
        if keyword == "minimum":
            return f"Property '{prop}' should be >= {expected}"
        if keyword == "maximum":
            return f"Property '{prop}' should be <= {expected}"
        if keyword == "additionalProperties":
            match = _UNEXPECTED_PATTERN.search(error.message or "")
            extras = re.findall(r"'([^']*)'", match.group("extras")) if match else []
            return f"Additional property '{', '.join(extras) or prop}' is not allowed"
        return f"Validation error in '{prop}'"

    def generate_warnings(self, resume_data: Any) -> List[WarningRecord]:
        """
        Generate heuristic content quality warnings.

        Warnings do not affect validity and are only produced for objects.

        Args:
            resume_data: The resume data

        Returns:
            List[WarningRecord]: Warnings, most severe checks first
        """
        if not isinstance(resume_data, dict):
            return []

        warnings: List[WarningRecord] = []
        basics = resume_data.get("basics")
        basics = basics if isinstance(basics, dict) else {}

        if not basics:
            warnings.append(WarningRecord(
                type="missing-section",
                message="Basics section is missing or empty. This section typically contains name, email, and contact information.",
                severity="high",
            ))

        if not basics.get("name"):
            warnings.append(WarningRecord(
                type="missing-field",
                message="Name is missing from basics section. This is highly recommended.",
                severity="high",
            ))

        if not basics.get("email"):
            warnings.append(WarningRecord(
                type="missing-field",
                message="Email is missing from basics section. This is important for contact.",
                severity="medium",
            ))

        work = resume_data.get("work")
        if not isinstance(work, list) or not work:
            warnings.append(WarningRecord(
                type="missing-section",
                message="Work experience section is empty. Consider adding your professional experience.",
                severity="medium",
            ))
        else:
            undated = sum(1 for job in work if isinstance(job, dict) and not job.get("startDate"))
            if undated:
                warnings.append(WarningRecord(
                    type="content-quality",
                    message=f"{undated} work entries have no start date. Dates help readers follow your career.",
                    severity="low",
                ))

        summary = basics.get("summary")
        if isinstance(summary, str) and summary and len(summary) < MIN_SUMMARY_LENGTH:
            warnings.append(WarningRecord(
                type="content-quality",
                message="Summary is very short. Consider adding more details about your background.",
                severity="low",
            ))

        skills = resume_data.get("skills")
        if not isinstance(skills, list) or not skills:
            warnings.append(WarningRecord(
                type="missing-section",
                message="Skills section is empty. Adding skills can help highlight your expertise.",
                severity="low",
            ))
        else:
            unknown_levels = sorted({
                skill["level"] for skill in skills
                if isinstance(skill, dict)
                and isinstance(skill.get("level"), str)
                and skill["level"]
                and skill["level"] not in SKILL_LEVELS
            })
            if unknown_levels:
                warnings.append(WarningRecord(
                    type="content-quality",
                    message=(
                        f"Unrecognized skill levels: {', '.join(unknown_levels)}. "
                        f"Use one of: {', '.join(SKILL_LEVELS)}."
                    ),
                    severity="low",
                ))

        education = resume_data.get("education")
        if not isinstance(education, list) or not education:
            warnings.append(WarningRecord(
                type="missing-section",
                message="Education section is empty. Consider listing your degrees or training.",
                severity="low",
            ))

        return warnings

    def get_schema(self) -> Dict[str, Any]:
        """Return a copy of the schema definition."""
        return copy.deepcopy(self.schema)


@lru_cache
def get_schema_validator() -> SchemaValidator:
    """
    Get the shared validator for the JSON Resume schema.

    Returns:
        SchemaValidator: Validator compiled once per process
    """
    return SchemaValidator()


def validate_resume(resume_data: Any) -> ValidationResult:
    """Validate resume data with the shared validator."""
    return get_schema_validator().validate_resume(resume_data)


def get_schema() -> Dict[str, Any]:
    """Return a copy of the JSON Resume schema."""
    return copy.deepcopy(RESUME_SCHEMA)


def get_schema_info() -> Dict[str, str]:
    """
    Get schema version information.

    Returns:
        Dict[str, str]: Version, name, url and description
    """
    return {
        "version": SCHEMA_VERSION,
        "name": SCHEMA_NAME,
        "url": SCHEMA_URL,
        "description": SCHEMA_DESCRIPTION,
    }
