"""Tests for tolerant parsing of model output."""

from __future__ import annotations

import json

import pytest

from repodoc.errors import MalformedModelOutput
from repodoc.extraction import find_json_object, parse_model_output


def test_bare_json_is_parsed_directly(valid_documentation) -> None:
    assert parse_model_output(json.dumps(valid_documentation)) == valid_documentation


def test_markdown_fenced_output_is_extracted(valid_documentation) -> None:
    text = "```json\n" + json.dumps(valid_documentation, indent=2) + "\n```"

    assert parse_model_output(text) == valid_documentation


def test_surrounding_prose_is_ignored(valid_documentation) -> None:
    text = (
        "Sure! Here is the documentation you asked for:\n"
        + json.dumps(valid_documentation)
        + "\nLet me know if you need anything else {or more detail}."
    )

    assert parse_model_output(text) == valid_documentation


def test_braces_inside_strings_do_not_end_the_span() -> None:
    text = 'Result: {"overview": "renders {name} and \\"}\\" safely", "flow": []} trailing'

    assert find_json_object(text) == '{"overview": "renders {name} and \\"}\\" safely", "flow": []}'
    assert parse_model_output(text)["overview"] == 'renders {name} and "}" safely'


def test_first_balanced_span_wins() -> None:
    assert find_json_object('a {"x": {"y": 1}} b {"z": 2}') == '{"x": {"y": 1}}'


def test_output_without_braces_is_malformed() -> None:
    with pytest.raises(MalformedModelOutput):
        parse_model_output("I could not find enough information about this repository.")


def test_unbalanced_span_is_malformed() -> None:
    with pytest.raises(MalformedModelOutput):
        parse_model_output('Here you go: {"overview": "truncated output')


def test_unparseable_span_is_malformed() -> None:
    with pytest.raises(MalformedModelOutput):
        parse_model_output("prefix {overview: not json} suffix")
