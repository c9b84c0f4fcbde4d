"""Version-control snapshot retrieval (GitHub)."""

from .fetcher import GitHubSnapshotFetcher, parse_repo_url

__all__ = ["GitHubSnapshotFetcher", "parse_repo_url"]
