"""Turns a heuristic analysis into schema-validated documentation via a language model."""

from __future__ import annotations

from typing import Optional

from .errors import EmptyResult
from .extraction import parse_model_output
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import RepoAnalysis
from .prompting.builder import PromptBuilder
from .schemas import GeneratedDocumentation, validate_documentation


class DocumentationSynthesizer:
    """Prompts the model once, then parses and validates its answer.

    Raises ``EmptyResult`` when the model returns nothing,
    ``MalformedModelOutput`` when no JSON object can be recovered and
    ``SchemaValidationError`` when the object does not match the schema.
    Upstream and configuration errors from the runner pass through
    unchanged.
    """

    def __init__(
        self,
        runner: LLMRunner | None = None,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self.runner = runner or LLMRunner()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.logger = get_logger("synthesizer")

    def synthesize(
        self, analysis: RepoAnalysis, *, timeout: Optional[float] = None
    ) -> GeneratedDocumentation:
        request = self.prompt_builder.build(analysis)
        self.logger.debug("Prompt for %s is %d characters", analysis.project_name, len(request.prompt))

        raw = self.runner.run(request.prompt, system=request.system, timeout=timeout)
        if not raw or not raw.strip():
            raise EmptyResult(f"Language model returned no content for {analysis.project_name}")

        parsed = parse_model_output(raw)
        documentation = validate_documentation(parsed)
        self.logger.info(
            "Documentation validated for %s (%d flow steps, %d functions)",
            analysis.project_name,
            len(documentation.flow),
            len(documentation.functions),
        )
        return documentation


__all__ = ["DocumentationSynthesizer"]
