"""Prompt construction for the documentation model call."""

from .builder import PromptBuilder, PromptRequest, create_environment
from .constants import SYSTEM_PROMPT

__all__ = ["PromptBuilder", "PromptRequest", "SYSTEM_PROMPT", "create_environment"]
