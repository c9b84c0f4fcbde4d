"""Pipeline orchestration: fetch snapshot, analyze, synthesize, assemble."""

from __future__ import annotations

import asyncio
import functools
import time
from datetime import UTC, datetime
from typing import Callable, Optional

from .analyzers import HeuristicAnalyzer
from .config import RepoDocConfig
from .errors import DeadlineExceeded, InvalidInput
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import GenerationResult
from .synthesizer import DocumentationSynthesizer
from .vcs import GitHubSnapshotFetcher

MISSING_REPO_URL = "Missing repoUrl in request body"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Orchestrator:
    """Runs the documentation pipeline for one repository reference.

    Stages run strictly in order and the first failure aborts the rest, so a
    caller either gets a complete ``GenerationResult`` or an exception.
    """

    def __init__(
        self,
        fetcher: GitHubSnapshotFetcher | None = None,
        analyzer: HeuristicAnalyzer | None = None,
        synthesizer: DocumentationSynthesizer | None = None,
        *,
        clock: Callable[[], str] = utc_timestamp,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.fetcher = fetcher or GitHubSnapshotFetcher()
        self.analyzer = analyzer or HeuristicAnalyzer()
        self.synthesizer = synthesizer or DocumentationSynthesizer()
        self._clock = clock
        self._monotonic = monotonic
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: RepoDocConfig) -> "Orchestrator":
        """Build an orchestrator whose clients follow ``config``."""
        llm = config.llm
        runner_kwargs: dict[str, object] = {}
        if llm.base_url:
            runner_kwargs["base_url"] = llm.base_url
        if llm.api_key:
            runner_kwargs["api_key"] = llm.api_key
        if llm.temperature is not None:
            runner_kwargs["temperature"] = llm.temperature
        if llm.max_tokens is not None:
            runner_kwargs["max_tokens"] = llm.max_tokens
        if llm.request_timeout is not None:
            runner_kwargs["request_timeout"] = llm.request_timeout
        if llm.max_retries is not None:
            runner_kwargs["max_retries"] = llm.max_retries
        if llm.backoff_factor is not None:
            runner_kwargs["backoff_factor"] = llm.backoff_factor
        runner = LLMRunner(llm.model, **runner_kwargs)  # type: ignore[arg-type]

        github = config.github
        fetcher = GitHubSnapshotFetcher(
            github.token,
            timeout=github.request_timeout or 30.0,
            max_retries=github.max_retries if github.max_retries is not None else 3,
        )
        return cls(fetcher=fetcher, synthesizer=DocumentationSynthesizer(runner=runner))

    def generate(self, repo_url: Optional[str], *, deadline: Optional[float] = None) -> GenerationResult:
        """Produce documentation for ``repo_url``.

        ``deadline`` is an absolute ``time.monotonic()`` value. It is checked
        before each network stage and the remaining budget bounds the model
        call.
        """
        if repo_url is None or not str(repo_url).strip():
            raise InvalidInput(MISSING_REPO_URL)

        self._remaining(deadline, "fetching repository snapshot")
        self.logger.info("Fetching GitHub info for %s", repo_url)
        snapshot = self.fetcher.fetch(str(repo_url))

        self.logger.info("Analyzing %s (%d files)", snapshot.full_name, len(snapshot.files))
        analysis = self.analyzer.analyze(snapshot)
        self.logger.debug(
            "Heuristic analysis for %s: stack=%s flow=%d functions=%d",
            snapshot.full_name,
            analysis.tech_stack.to_dict(),
            len(analysis.flow),
            len(analysis.functions),
        )

        remaining = self._remaining(deadline, "generating documentation")
        self.logger.info("Generating documentation for %s", snapshot.full_name)
        documentation = self.synthesizer.synthesize(analysis, timeout=remaining)

        return GenerationResult(
            documentation=documentation,
            commit_hash=snapshot.commit_hash,
            generated_at=self._clock(),
        )

    async def agenerate(
        self, repo_url: Optional[str], *, timeout: Optional[float] = None
    ) -> GenerationResult:
        """Run :meth:`generate` off the event loop, bounded by ``timeout`` seconds."""
        deadline = self._monotonic() + timeout if timeout is not None else None
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            None, functools.partial(self.generate, repo_url, deadline=deadline)
        )
        try:
            return await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError as exc:
            raise DeadlineExceeded(
                f"Documentation generation for {repo_url} exceeded {timeout}s"
            ) from exc

    def _remaining(self, deadline: Optional[float], stage: str) -> Optional[float]:
        if deadline is None:
            return None
        remaining = deadline - self._monotonic()
        if remaining <= 0:
            raise DeadlineExceeded(f"Deadline passed before {stage}")
        return remaining


__all__ = ["MISSING_REPO_URL", "Orchestrator", "utc_timestamp"]
