"""Core data models shared across repodoc components."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .schemas import GeneratedDocumentation


@dataclass(frozen=True)
class FileRef:
    """A single tracked file in a snapshot. Contents are never fetched."""

    path: str
    blob_id: str


@dataclass(frozen=True)
class RepositorySnapshot:
    """Point-in-time file listing of a repository's default branch."""

    owner: str
    name: str
    default_branch: str
    commit_hash: str
    files: Tuple[FileRef, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class FunctionEntry:
    """Coarse responsibility attached to a file path."""

    name: str
    responsibility: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "responsibility": self.responsibility}


@dataclass(frozen=True)
class TechStack:
    """Detected technologies grouped by category, de-duplicated."""

    frontend: Tuple[str, ...] = ()
    backend: Tuple[str, ...] = ()
    database: Tuple[str, ...] = ()
    tooling: Tuple[str, ...] = ()

    CATEGORIES = ("frontend", "backend", "database", "tooling")

    def is_empty(self) -> bool:
        return not any(getattr(self, category) for category in self.CATEGORIES)

    def to_dict(self) -> Dict[str, list[str]]:
        return {category: list(getattr(self, category)) for category in self.CATEGORIES}


@dataclass(frozen=True)
class RepoAnalysis:
    """Deterministic, filename-only summary of a repository."""

    project_name: str
    short_description: str
    flow: Tuple[str, ...]
    functions: Tuple[FunctionEntry, ...]
    tech_stack: TechStack
    setup_hints: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectName": self.project_name,
            "shortDescription": self.short_description,
            "flow": list(self.flow),
            "functions": [entry.to_dict() for entry in self.functions],
            "techStack": self.tech_stack.to_dict(),
            "setupHints": list(self.setup_hints),
        }

    def to_json(self) -> str:
        """Canonical JSON text used as language model input."""
        return json.dumps(self.to_dict(), indent=2, sort_keys=True, ensure_ascii=False)


@dataclass
class GenerationResult:
    """Validated documentation plus the response metadata."""

    documentation: GeneratedDocumentation
    commit_hash: str
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentation": self.documentation.model_dump(by_alias=True),
            "commit_hash": self.commit_hash,
            "generated_at": self.generated_at,
        }


__all__ = [
    "FileRef",
    "FunctionEntry",
    "GenerationResult",
    "RepoAnalysis",
    "RepositorySnapshot",
    "TechStack",
]
