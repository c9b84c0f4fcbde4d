"""Declarative schema for language-model generated documentation."""

from __future__ import annotations

import json
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from .errors import SchemaValidationError

NOT_IMPLEMENTED = "Not implemented"


class _DocumentationModel(BaseModel):
    # Extra keys are ignored; StrictStr keeps numbers and booleans from passing as text.
    model_config = ConfigDict(extra="ignore")


class DocumentedFunction(_DocumentationModel):
    name: StrictStr
    responsibility: StrictStr


class DocumentedTechStack(_DocumentationModel):
    frontend: List[StrictStr]
    backend: List[StrictStr]
    database: List[StrictStr]
    tooling: List[StrictStr]


class GeneratedDocumentation(_DocumentationModel):
    """Structured documentation returned to callers."""

    overview: StrictStr
    flow: List[StrictStr]
    functions: List[DocumentedFunction]
    tech_stack: DocumentedTechStack = Field(alias="techStack")
    setup: List[StrictStr]


def validate_documentation(payload: Any) -> GeneratedDocumentation:
    """Validate a parsed JSON value, raising ``SchemaValidationError`` on the first failure."""
    try:
        return GeneratedDocumentation.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_path = format_location(first.get("loc", ()))
        raise SchemaValidationError(
            f"Field '{field_path}' failed validation: {first.get('msg', 'invalid value')}",
            field_path=field_path,
        ) from exc


def format_location(loc: Any) -> str:
    """Render a pydantic error location as a dotted path."""
    parts = [str(part) for part in loc]
    return ".".join(parts) if parts else "<root>"


def schema_json() -> str:
    """JSON Schema of the documentation object, keyed by wire names."""
    return json.dumps(GeneratedDocumentation.model_json_schema(by_alias=True), indent=2)


__all__ = [
    "DocumentedFunction",
    "DocumentedTechStack",
    "GeneratedDocumentation",
    "NOT_IMPLEMENTED",
    "format_location",
    "schema_json",
    "validate_documentation",
]
