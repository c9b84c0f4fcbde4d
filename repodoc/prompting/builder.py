"""Builds the documentation prompt from a heuristic analysis."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import RepoAnalysis
from ..schemas import schema_json
from .constants import NOT_IMPLEMENTED, PROMPT_TEMPLATE, SYSTEM_PROMPT

TEMPLATES_DIR = Path(__file__).with_name("templates")


@dataclass(frozen=True)
class PromptRequest:
    """System instruction and user prompt for a single model call."""

    system: str
    prompt: str


class PromptBuilder:
    """Renders the documentation prompt template for an analysis."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        placeholder: str = NOT_IMPLEMENTED,
    ) -> None:
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.system_prompt = system_prompt
        self.placeholder = placeholder
        self._env = create_environment(self.templates_dir)

    def build(self, analysis: RepoAnalysis) -> PromptRequest:
        template = self._env.get_template(PROMPT_TEMPLATE)
        prompt = template.render(
            project_name=analysis.project_name,
            placeholder=self.placeholder,
            schema=schema_json(),
            analysis=analysis.to_json(),
        )
        return PromptRequest(system=self.system_prompt, prompt=prompt.strip() + "\n")


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Jinja environment that prefers ``templates_dir`` over the bundled templates."""
    directories = []
    if templates_dir and templates_dir != TEMPLATES_DIR:
        directories.append(str(templates_dir))
    directories.append(str(TEMPLATES_DIR))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


__all__ = ["PromptBuilder", "PromptRequest", "create_environment"]
