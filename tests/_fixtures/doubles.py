"""Test doubles and canned data shared across the test suite."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from repodoc.llm.runner import LLMRequest
from repodoc.models import FileRef, RepositorySnapshot

VALID_DOCUMENTATION: Dict[str, Any] = {
    "overview": "widgets is a Next.js application that caches request metadata in Redis.",
    "flow": [
        "Client sends request to API endpoint",
        "Request metadata is checked or stored in Redis",
    ],
    "functions": [
        {"name": "lib/redis.ts", "responsibility": "Handles caching or request tracking logic"},
        {"name": "components/Button.tsx", "responsibility": "Reusable UI component"},
    ],
    "techStack": {
        "frontend": ["Next.js", "React"],
        "backend": [],
        "database": ["Redis"],
        "tooling": [],
    },
    "setup": [
        "Install dependencies using npm or yarn",
        "Run development server using npm run dev",
        "Configure required environment variables",
    ],
}

SCENARIO_FILES = ["package.json", "next.config.js", "components/Button.tsx", "lib/redis.ts"]


def build_snapshot(
    paths: Sequence[str],
    *,
    owner: str = "acme",
    name: str = "widgets",
    commit_hash: str = "3f2a9c1d0e5b7a8f9c0d1e2f3a4b5c6d7e8f9a0b",
) -> RepositorySnapshot:
    """Snapshot whose files carry the given paths in order."""
    return RepositorySnapshot(
        owner=owner,
        name=name,
        default_branch="main",
        commit_hash=commit_hash,
        files=tuple(FileRef(path=path, blob_id=f"blob-{index}") for index, path in enumerate(paths)),
    )


class StubFetcher:
    """Returns a canned snapshot and records requested URLs."""

    def __init__(self, snapshot: RepositorySnapshot | None = None, error: Exception | None = None) -> None:
        self.snapshot = snapshot or build_snapshot(SCENARIO_FILES)
        self.error = error
        self.calls: List[str] = []

    def fetch(self, repo_url: str) -> RepositorySnapshot:
        self.calls.append(repo_url)
        if self.error is not None:
            raise self.error
        return self.snapshot


class ScriptedTransport:
    """Stands in for the HTTP transport of ``LLMRunner``.

    Responses are consumed in order; the last one repeats. Exceptions are
    raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.requests: List[LLMRequest] = []

    def __call__(self, request: LLMRequest) -> str:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


__all__ = [
    "SCENARIO_FILES",
    "ScriptedTransport",
    "StubFetcher",
    "VALID_DOCUMENTATION",
    "build_snapshot",
]
