"""Tests for Markdown rendering of generated documentation."""

from __future__ import annotations

from pathlib import Path

from repodoc.models import GenerationResult
from repodoc.render import render_markdown, render_result
from repodoc.schemas import validate_documentation


def test_render_markdown_sections(valid_documentation) -> None:
    markdown = render_markdown(validate_documentation(valid_documentation), title="acme/widgets")

    assert markdown.startswith("# acme/widgets\n\nwidgets is a Next.js application")
    assert "## How it works\n\n1. Client sends request to API endpoint\n2. Request metadata" in markdown
    assert "- **lib/redis.ts**: Handles caching or request tracking logic" in markdown
    assert "- Frontend: Next.js, React" in markdown
    assert "- Tooling: Not implemented" in markdown
    assert "3. Configure required environment variables" in markdown
    assert "Generated from commit" not in markdown
    assert markdown.endswith("\n") and not markdown.endswith("\n\n")


def test_render_markdown_without_functions_uses_placeholder(valid_documentation) -> None:
    valid_documentation["functions"] = []

    markdown = render_markdown(validate_documentation(valid_documentation), title="acme/widgets")

    assert "## Key files\n\n- Not implemented\n" in markdown


def test_render_result_appends_commit_footer(valid_documentation) -> None:
    result = GenerationResult(
        documentation=validate_documentation(valid_documentation),
        commit_hash="3f2a9c1",
        generated_at="2026-10-19T12:00:00.000Z",
    )

    markdown = render_result(result, title="acme/widgets")

    assert markdown.rstrip().endswith(
        "Generated from commit `3f2a9c1` at 2026-10-19T12:00:00.000Z."
    )


def test_custom_template_directory_overrides_bundled(tmp_path: Path, valid_documentation) -> None:
    (tmp_path / "documentation.md.j2").write_text("{{ title }}: {{ doc.overview }}\n", encoding="utf-8")

    markdown = render_markdown(
        validate_documentation(valid_documentation), title="acme/widgets", templates_dir=tmp_path
    )

    assert markdown == f"acme/widgets: {valid_documentation['overview']}\n"
