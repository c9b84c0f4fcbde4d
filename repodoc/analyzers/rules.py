"""Rule tables used by the heuristic analyzer.

Each table is an ordered list of ``(predicate, effect)`` records. Predicates
receive a lower-cased repository path; adding a detector means appending a
record here, the analyzer's control flow never changes.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Callable, Tuple

PathPredicate = Callable[[str], bool]


def contains(*markers: str) -> PathPredicate:
    """Match when any marker occurs anywhere in the path."""

    def _predicate(path: str) -> bool:
        return any(marker in path for marker in markers)

    return _predicate


def endswith(*suffixes: str) -> PathPredicate:
    """Match on path suffix, typically a file extension."""

    def _predicate(path: str) -> bool:
        return path.endswith(suffixes)

    return _predicate


def named(*basenames: str) -> PathPredicate:
    """Match when the final path component equals one of ``basenames``."""
    targets = frozenset(basenames)

    def _predicate(path: str) -> bool:
        return posixpath.basename(path) in targets

    return _predicate


def basename_startswith(*prefixes: str) -> PathPredicate:
    def _predicate(path: str) -> bool:
        return posixpath.basename(path).startswith(prefixes)

    return _predicate


def any_of(*predicates: PathPredicate) -> PathPredicate:
    def _predicate(path: str) -> bool:
        return any(predicate(path) for predicate in predicates)

    return _predicate


@dataclass(frozen=True)
class StackRule:
    """Adds ``tag`` to ``category`` when any path satisfies ``matches``."""

    category: str
    tag: str
    matches: PathPredicate


@dataclass(frozen=True)
class ResponsibilityRule:
    """Describes what a single matching file is responsible for."""

    matches: PathPredicate
    responsibility: str


@dataclass(frozen=True)
class FlowRule:
    """Contributes one runtime flow step when any path matches."""

    matches: PathPredicate
    step: str


@dataclass(frozen=True)
class SetupRule:
    """Contributes one setup hint when any path matches."""

    matches: PathPredicate
    hint: str


STACK_RULES: Tuple[StackRule, ...] = (
    # frontend
    StackRule("frontend", "Next.js", contains("next.config")),
    StackRule("frontend", "React", endswith(".tsx", ".jsx")),
    StackRule("frontend", "Vue", any_of(endswith(".vue"), contains("vue.config", "nuxt.config"))),
    StackRule("frontend", "Svelte", any_of(endswith(".svelte"), contains("svelte.config"))),
    StackRule("frontend", "Angular", named("angular.json")),
    # backend
    StackRule("backend", "Python", named("requirements.txt", "pyproject.toml", "setup.py")),
    StackRule("backend", "Django", named("manage.py")),
    StackRule("backend", "Go", named("go.mod")),
    StackRule("backend", "Rust", named("cargo.toml")),
    StackRule("backend", "Java", named("pom.xml", "build.gradle", "build.gradle.kts")),
    StackRule("backend", "Ruby", named("gemfile")),
    StackRule("backend", "Node.js", named("server.js", "server.ts")),
    # database
    StackRule("database", "Redis", contains("redis")),
    StackRule("database", "Prisma", contains("prisma")),
    StackRule("database", "MongoDB", contains("mongo")),
    StackRule("database", "PostgreSQL", contains("postgres")),
    StackRule("database", "SQLite", contains("sqlite")),
    StackRule("database", "Supabase", contains("supabase")),
    StackRule("database", "Drizzle ORM", contains("drizzle.config")),
    # tooling
    StackRule("tooling", "ESLint", contains("eslint")),
    StackRule("tooling", "Tailwind CSS", contains("tailwind")),
    StackRule("tooling", "Prettier", contains("prettier")),
    StackRule("tooling", "TypeScript", named("tsconfig.json")),
    StackRule("tooling", "Vite", contains("vite.config")),
    StackRule("tooling", "Jest", contains("jest.config")),
    StackRule("tooling", "Docker", named("dockerfile")),
    StackRule("tooling", "GitHub Actions", contains(".github/workflows/")),
)

RESPONSIBILITY_RULES: Tuple[ResponsibilityRule, ...] = (
    ResponsibilityRule(contains("/api/"), "API route handler"),
    ResponsibilityRule(contains("middleware"), "Request middleware applied before route handlers"),
    ResponsibilityRule(contains("redis", "cache"), "Handles caching or request tracking logic"),
    ResponsibilityRule(contains("component"), "Reusable UI component"),
    ResponsibilityRule(basename_startswith("page.", "layout."), "Application page or layout"),
)

FLOW_RULES: Tuple[FlowRule, ...] = (
    FlowRule(contains("/api/"), "Client sends request to API endpoint"),
    FlowRule(contains("middleware"), "Middleware inspects the request before it reaches a handler"),
    FlowRule(contains("redis"), "Request metadata is checked or stored in Redis"),
    FlowRule(contains("rate-limit", "ratelimit"), "Request quota is checked before the request is served"),
    FlowRule(contains("generate-excel"), "Server generates Excel file and returns it as response"),
)

NO_FLOW_DETECTED = "No clear runtime flow detected"

SETUP_RULES: Tuple[SetupRule, ...] = (
    SetupRule(named("package.json"), "Install dependencies using npm or yarn"),
    SetupRule(named("requirements.txt"), "Install dependencies using pip install -r requirements.txt"),
    SetupRule(named("pyproject.toml"), "Install the project using pip install -e ."),
    SetupRule(contains("next.config"), "Run development server using npm run dev"),
    SetupRule(contains("docker-compose", "compose.yaml", "compose.yml"), "Start services using docker compose up"),
)

ENVIRONMENT_HINT = "Configure required environment variables"


__all__ = [
    "ENVIRONMENT_HINT",
    "FLOW_RULES",
    "FlowRule",
    "NO_FLOW_DETECTED",
    "PathPredicate",
    "RESPONSIBILITY_RULES",
    "ResponsibilityRule",
    "SETUP_RULES",
    "STACK_RULES",
    "SetupRule",
    "StackRule",
    "any_of",
    "basename_startswith",
    "contains",
    "endswith",
    "named",
]
