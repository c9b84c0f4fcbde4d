"""Fetch repository snapshots (metadata and file tree, never contents) from GitHub."""

from __future__ import annotations

import math
import re
from typing import Any, List, Optional, Tuple

import requests
from github import Auth, BadCredentialsException, Github, GithubException
from github.GithubRetry import GithubRetry

from ..errors import InvalidInput, UpstreamAuthError, UpstreamRequestError
from ..logging import get_logger
from ..models import FileRef, RepositorySnapshot

_SERVICE = "github"
_REPO_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?(?:[/?#].*)?$"
)

logger = get_logger("github")


def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    """Split a ``github.com/<owner>/<name>`` reference into its parts."""
    match = _REPO_URL_PATTERN.match(repo_url.strip())
    if not match:
        raise InvalidInput("Invalid GitHub repository URL")
    return match.group("owner"), match.group("name")


class GitHubSnapshotFetcher:
    """Reads the default-branch tree of a repository through the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        client: Any = None,
    ) -> None:
        if client is not None:
            self._client = client
            return
        if not token:
            logger.warning("No GitHub token configured; using unauthenticated, rate-limited access")
        self._client = Github(
            auth=Auth.Token(token) if token else None,
            # PyGithub takes whole seconds and requests rejects a zero timeout.
            timeout=max(1, math.ceil(timeout)),
            retry=GithubRetry(total=max_retries, backoff_factor=0.5),
        )

    def fetch(self, repo_url: str) -> RepositorySnapshot:
        """Return owner/name, default branch, head commit and blob paths for ``repo_url``."""
        owner, name = parse_repo_url(repo_url)
        full_name = f"{owner}/{name}"

        try:
            repo = self._client.get_repo(full_name)
            default_branch = repo.default_branch
            commit_hash = repo.get_commit(default_branch).sha
            tree = repo.get_git_tree(commit_hash, recursive=True)
        except BadCredentialsException as exc:
            raise UpstreamAuthError(
                f"GitHub rejected the configured token for {full_name}", service=_SERVICE
            ) from exc
        except GithubException as exc:
            body = _describe_payload(exc.data)
            raise UpstreamRequestError(
                f"GitHub API Error {exc.status} for {full_name}: {body}",
                service=_SERVICE,
                status=exc.status,
                body=body,
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise UpstreamRequestError(
                f"GitHub API unreachable for {full_name}: {exc}", service=_SERVICE
            ) from exc

        if _is_truncated(tree):
            logger.warning(
                "GitHub truncated the tree listing for %s@%s; analysis covers a partial file list",
                full_name,
                commit_hash[:7],
            )

        files: List[FileRef] = [
            FileRef(path=item.path, blob_id=item.sha)
            for item in tree.tree
            if item.type == "blob" and item.path and item.sha
        ]
        logger.info(
            "Fetched %s@%s (%s): %d files", full_name, default_branch, commit_hash[:7], len(files)
        )
        return RepositorySnapshot(
            owner=owner,
            name=name,
            default_branch=default_branch,
            commit_hash=commit_hash,
            files=tuple(files),
        )


def _is_truncated(tree: Any) -> bool:
    raw = getattr(tree, "raw_data", None)
    return isinstance(raw, dict) and bool(raw.get("truncated"))


def _describe_payload(data: Any) -> str:
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str):
            return message
    return str(data) if data is not None else ""


__all__ = ["GitHubSnapshotFetcher", "parse_repo_url"]
