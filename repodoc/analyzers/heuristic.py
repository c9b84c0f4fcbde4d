"""Deterministic, filename-only repository analyzer.

No language model and no file contents: everything here is derived from
the paths listed in a snapshot. The same path list always yields the same
analysis.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..models import FunctionEntry, RepoAnalysis, RepositorySnapshot, TechStack
from .rules import (
    ENVIRONMENT_HINT,
    FLOW_RULES,
    NO_FLOW_DETECTED,
    RESPONSIBILITY_RULES,
    SETUP_RULES,
    STACK_RULES,
    FlowRule,
    ResponsibilityRule,
    SetupRule,
    StackRule,
)


class HeuristicAnalyzer:
    """Applies the rule tables to a snapshot's file paths."""

    def __init__(
        self,
        *,
        stack_rules: Sequence[StackRule] = STACK_RULES,
        responsibility_rules: Sequence[ResponsibilityRule] = RESPONSIBILITY_RULES,
        flow_rules: Sequence[FlowRule] = FLOW_RULES,
        setup_rules: Sequence[SetupRule] = SETUP_RULES,
    ) -> None:
        self.stack_rules = tuple(stack_rules)
        self.responsibility_rules = tuple(responsibility_rules)
        self.flow_rules = tuple(flow_rules)
        self.setup_rules = tuple(setup_rules)

    def analyze(self, snapshot: RepositorySnapshot) -> RepoAnalysis:
        original_paths = [file.path for file in snapshot.files]
        paths = [path.lower() for path in original_paths]

        tech_stack = self._detect_stack(paths)
        flow = self._derive_flow(paths)
        return RepoAnalysis(
            project_name=snapshot.name,
            short_description=describe(snapshot.name, tech_stack, flow, len(paths)),
            flow=flow,
            functions=self._tag_responsibilities(original_paths),
            tech_stack=tech_stack,
            setup_hints=self._setup_hints(paths),
        )

    def _detect_stack(self, paths: Sequence[str]) -> TechStack:
        found: Dict[str, List[str]] = {category: [] for category in TechStack.CATEGORIES}
        for rule in self.stack_rules:
            tags = found.setdefault(rule.category, [])
            if rule.tag in tags:
                continue
            if _any_path(paths, rule.matches):
                tags.append(rule.tag)
        return TechStack(
            frontend=tuple(found["frontend"]),
            backend=tuple(found["backend"]),
            database=tuple(found["database"]),
            tooling=tuple(found["tooling"]),
        )

    def _tag_responsibilities(self, paths: Iterable[str]) -> tuple[FunctionEntry, ...]:
        entries: List[FunctionEntry] = []
        for path in paths:
            lowered = path.lower()
            for rule in self.responsibility_rules:
                if rule.matches(lowered):
                    entries.append(FunctionEntry(name=path, responsibility=rule.responsibility))
        return tuple(entries)

    def _derive_flow(self, paths: Sequence[str]) -> tuple[str, ...]:
        steps = [rule.step for rule in self.flow_rules if _any_path(paths, rule.matches)]
        if not steps:
            return (NO_FLOW_DETECTED,)
        return tuple(steps)

    def _setup_hints(self, paths: Sequence[str]) -> tuple[str, ...]:
        hints = [rule.hint for rule in self.setup_rules if _any_path(paths, rule.matches)]
        hints.append(ENVIRONMENT_HINT)
        return tuple(hints)


def describe(name: str, tech_stack: TechStack, flow: Sequence[str], file_count: int) -> str:
    """Build a factual one-sentence description from detected signals."""
    noun = "file" if file_count == 1 else "files"
    if tech_stack.is_empty():
        return (
            f"{name} is a repository with {file_count} tracked {noun}; "
            "no framework signals were detected from its file names."
        )

    application = list(tech_stack.frontend) + list(tech_stack.backend)
    subject = _join(application or list(tech_stack.tooling)) or "software"
    sentence = f"{name} is a {subject} project"
    if tech_stack.database:
        sentence += f" backed by {_join(list(tech_stack.database))}"
    if any("API endpoint" in step for step in flow):
        sentence += " that exposes API endpoints"
    return f"{sentence}, with {file_count} tracked {noun}."


def analyze_repository(snapshot: RepositorySnapshot) -> RepoAnalysis:
    """Analyze ``snapshot`` with the built-in rule tables."""
    return _DEFAULT_ANALYZER.analyze(snapshot)


def _any_path(paths: Iterable[str], predicate) -> bool:
    return any(predicate(path) for path in paths)


def _join(items: List[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return ", ".join(items[:-1]) + f" and {items[-1]}"


_DEFAULT_ANALYZER = HeuristicAnalyzer()


__all__ = ["HeuristicAnalyzer", "analyze_repository", "describe"]
