"""Shared constants for documentation prompting."""

from __future__ import annotations

from ..schemas import NOT_IMPLEMENTED

SYSTEM_PROMPT = "You output ONLY valid JSON. No markdown. No prose outside JSON."

PROMPT_TEMPLATE = "documentation_prompt.j2"
MARKDOWN_TEMPLATE = "documentation.md.j2"


__all__ = ["MARKDOWN_TEMPLATE", "NOT_IMPLEMENTED", "PROMPT_TEMPLATE", "SYSTEM_PROMPT"]
