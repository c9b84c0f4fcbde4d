"""Parsing of semi-structured language model output."""

from __future__ import annotations

import json
from typing import Any, Optional

from .errors import MalformedModelOutput
from .logging import get_logger

logger = get_logger("extraction")


def parse_model_output(text: str) -> Any:
    """Parse the model response as JSON, falling back to brace extraction.

    Direct ``json.loads`` is attempted first. When that fails the first
    balanced ``{...}`` span is isolated with :func:`find_json_object` and
    parsed instead, which copes with markdown fences and leading or trailing
    prose. Raises :class:`MalformedModelOutput` when neither works.
    """
    stripped = text.strip()
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        logger.debug("Model output is not bare JSON; attempting brace extraction")

    candidate = find_json_object(stripped)
    if candidate is None:
        raise MalformedModelOutput("No JSON object found in model output")
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MalformedModelOutput(f"Extracted span is not valid JSON: {exc.msg}") from exc


def find_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` span in ``text``, or None.

    Braces inside JSON string literals are ignored so values such as
    ``"use {name}"`` do not end the scan early.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


__all__ = ["find_json_object", "parse_model_output"]
