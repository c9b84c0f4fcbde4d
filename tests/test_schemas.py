"""Tests for the documentation schema."""

from __future__ import annotations

import json

import pytest

from repodoc.errors import SchemaValidationError
from repodoc.schemas import GeneratedDocumentation, schema_json, validate_documentation


def test_valid_payload_round_trips(valid_documentation) -> None:
    documentation = validate_documentation(valid_documentation)

    serialized = json.dumps(documentation.model_dump(by_alias=True))
    revalidated = validate_documentation(json.loads(serialized))

    assert revalidated == documentation
    assert json.loads(serialized) == valid_documentation


def test_string_instead_of_list_names_field_path(valid_documentation) -> None:
    valid_documentation["techStack"]["frontend"] = "Next.js"

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_documentation(valid_documentation)

    assert excinfo.value.field_path == "techStack.frontend"


def test_missing_required_field_is_not_invented(valid_documentation) -> None:
    del valid_documentation["setup"]

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_documentation(valid_documentation)

    assert excinfo.value.field_path == "setup"


def test_nested_list_item_path(valid_documentation) -> None:
    valid_documentation["functions"][1]["name"] = 42

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_documentation(valid_documentation)

    assert excinfo.value.field_path == "functions.1.name"


def test_flow_as_paragraph_is_rejected(valid_documentation) -> None:
    valid_documentation["flow"] = "Client calls the API, then Redis is consulted."

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_documentation(valid_documentation)

    assert excinfo.value.field_path == "flow"


def test_non_object_root_is_rejected() -> None:
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_documentation(["overview"])

    assert excinfo.value.field_path == "<root>"


def test_extra_keys_are_ignored(valid_documentation) -> None:
    valid_documentation["confidence"] = "high"

    documentation = validate_documentation(valid_documentation)

    assert "confidence" not in documentation.model_dump(by_alias=True)


def test_schema_json_uses_wire_names() -> None:
    schema = json.loads(schema_json())

    assert set(schema["required"]) == {"overview", "flow", "functions", "techStack", "setup"}
    assert isinstance(GeneratedDocumentation.model_json_schema(by_alias=True), dict)


def test_python_field_name_is_not_accepted_for_tech_stack(valid_documentation) -> None:
    valid_documentation["tech_stack"] = valid_documentation.pop("techStack")

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_documentation(valid_documentation)

    assert excinfo.value.field_path == "techStack"
