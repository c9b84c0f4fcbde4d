"""Markdown rendering of generated documentation for terminal users."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .models import GenerationResult
from .prompting.builder import create_environment
from .prompting.constants import MARKDOWN_TEMPLATE, NOT_IMPLEMENTED
from .schemas import GeneratedDocumentation

_STACK_LABELS = (
    ("Frontend", "frontend"),
    ("Backend", "backend"),
    ("Database", "database"),
    ("Tooling", "tooling"),
)


def render_markdown(
    documentation: GeneratedDocumentation,
    *,
    title: str,
    commit_hash: Optional[str] = None,
    generated_at: Optional[str] = None,
    templates_dir: Path | None = None,
) -> str:
    """Render ``documentation`` as a Markdown document."""
    env = create_environment(templates_dir)
    template = env.get_template(MARKDOWN_TEMPLATE)
    stack = [
        (label, list(getattr(documentation.tech_stack, key))) for label, key in _STACK_LABELS
    ]
    rendered = template.render(
        title=title,
        doc=documentation,
        stack=stack,
        placeholder=NOT_IMPLEMENTED,
        commit_hash=commit_hash,
        generated_at=generated_at,
    )
    return rendered.strip() + "\n"


def render_result(result: GenerationResult, *, title: str) -> str:
    return render_markdown(
        result.documentation,
        title=title,
        commit_hash=result.commit_hash,
        generated_at=result.generated_at,
    )


__all__ = ["render_markdown", "render_result"]
