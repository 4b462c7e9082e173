"""JSON Resume schema v1.0.0 definition.

Based on https://jsonresume.org/schema/. Every object allows additional
properties; nothing is required. Date fields use ``format: date`` and are
checked by the flexible date checker in the schema validator.
"""

from typing import Any, Dict

SCHEMA_VERSION = "1.0.0"
SCHEMA_NAME = "JSON Resume Schema"
SCHEMA_URL = "https://jsonresume.org/schema/"
SCHEMA_DESCRIPTION = "Standard schema for resume data"

SKILL_LEVELS = ["Beginner", "Novice", "Intermediate", "Advanced", "Expert", "Master"]

LANGUAGE_FLUENCIES = [
    "Native speaker",
    "Fluent",
    "Conversational",
    "Basic",
    "Elementary proficiency",
    "Limited working proficiency",
    "Professional working proficiency",
    "Full professional proficiency",
    "Native or bilingual proficiency",
]

_STRING = {"type": "string"}
_DATE = {"type": "string", "format": "date"}
_URI = {"type": "string", "format": "uri"}
_STRING_LIST = {"type": "array", "items": {"type": "string"}}


def _entries(properties: Dict[str, Any]) -> Dict[str, Any]:
    """Array section whose items are open objects with the given properties."""
    return {
        "type": "array",
        "items": {
            "type": "object",
            "additionalProperties": True,
            "properties": properties,
        },
    }


RESUME_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "type": "object",
    "additionalProperties": True,
    "properties": {
        "basics": {
            "type": "object",
            "additionalProperties": True,
            "properties": {
                "name": _STRING,
                "label": _STRING,
                "image": _STRING,
                "email": {"type": "string", "format": "email"},
                "phone": _STRING,
                "url": _URI,
                "summary": _STRING,
                "location": {
                    "type": "object",
                    "additionalProperties": True,
                    "properties": {
                        "address": _STRING,
                        "postalCode": _STRING,
                        "city": _STRING,
                        "countryCode": _STRING,
                        "region": _STRING,
                    },
                },
                "profiles": _entries({
                    "network": _STRING,
                    "username": _STRING,
                    "url": _URI,
                }),
            },
        },
        "work": _entries({
            "name": _STRING,
            "location": _STRING,
            "description": _STRING,
            "position": _STRING,
            "url": _URI,
            "startDate": _DATE,
            "endDate": _DATE,
            "summary": _STRING,
            "highlights": _STRING_LIST,
        }),
        "volunteer": _entries({
            "organization": _STRING,
            "position": _STRING,
            "url": _URI,
            "startDate": _DATE,
            "endDate": _DATE,
            "summary": _STRING,
            "highlights": _STRING_LIST,
        }),
        "education": _entries({
            "institution": _STRING,
            "url": _URI,
            "area": _STRING,
            "studyType": _STRING,
            "startDate": _DATE,
            "endDate": _DATE,
            "score": _STRING,
            "courses": _STRING_LIST,
        }),
        "awards": _entries({
            "title": _STRING,
            "date": _DATE,
            "awarder": _STRING,
            "summary": _STRING,
        }),
        "certificates": _entries({
            "name": _STRING,
            "date": _DATE,
            "url": _URI,
            "issuer": _STRING,
        }),
        "publications": _entries({
            "name": _STRING,
            "publisher": _STRING,
            "releaseDate": _DATE,
            "url": _URI,
            "summary": _STRING,
        }),
        "skills": _entries({
            "name": _STRING,
            "level": {"type": "string", "enum": SKILL_LEVELS},
            "keywords": _STRING_LIST,
        }),
        "languages": _entries({
            "language": _STRING,
            "fluency": {"type": "string", "enum": LANGUAGE_FLUENCIES},
        }),
        "interests": _entries({
            "name": _STRING,
            "keywords": _STRING_LIST,
        }),
        "references": _entries({
            "name": _STRING,
            "reference": _STRING,
        }),
        "projects": _entries({
            "name": _STRING,
            "description": _STRING,
            "highlights": _STRING_LIST,
            "keywords": _STRING_LIST,
            "startDate": _DATE,
            "endDate": _DATE,
            "url": _URI,
            "roles": _STRING_LIST,
            "entity": _STRING,
            "type": _STRING,
        }),
        "meta": {
            "type": "object",
            "additionalProperties": True,
            "properties": {
                "canonical": _URI,
                "version": _STRING,
                "lastModified": {"type": "string", "format": "date-time"},
            },
        },
    },
}
