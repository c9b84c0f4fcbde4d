"""Configuration loading for repodoc (repodoc.yml plus environment overrides)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = "repodoc.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Language model endpoint settings."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None
    max_retries: Optional[int] = None
    backoff_factor: Optional[float] = None


@dataclass
class GitHubConfig:
    """GitHub API client settings."""

    token: Optional[str] = None
    request_timeout: Optional[float] = None
    max_retries: Optional[int] = None


@dataclass
class ServiceConfig:
    """HTTP service settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    request_timeout: Optional[float] = 120.0


@dataclass
class RepoDocConfig:
    """Effective settings for a CLI invocation or service process."""

    llm: LLMConfig = field(default_factory=LLMConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    source: Optional[Path] = None


ENV_GITHUB_TOKEN_KEYS = ("REPODOC_GITHUB_TOKEN", "GITHUB_TOKEN")


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> RepoDocConfig:
    """Load settings from ``config_path`` (file or directory) and the environment.

    Values present in the file win; environment variables only fill gaps.
    A missing file yields defaults.
    """
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path or Path.cwd())

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig(
        model=_as_str(llm_data.get("model")),
        base_url=_as_str(llm_data.get("base_url")),
        api_key=_as_str(llm_data.get("api_key")),
        temperature=_as_float(llm_data.get("temperature")),
        max_tokens=_as_int(llm_data.get("max_tokens")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
        max_retries=_as_int(llm_data.get("max_retries")),
        backoff_factor=_as_float(llm_data.get("backoff_factor")),
    )

    github_data = _as_dict(data.get("github"))
    github = GitHubConfig(
        token=_as_str(github_data.get("token")) or _first_env_value(env, ENV_GITHUB_TOKEN_KEYS),
        request_timeout=_as_float(github_data.get("request_timeout")),
        max_retries=_as_int(github_data.get("max_retries")),
    )

    service_data = _as_dict(data.get("service"))
    service = ServiceConfig()
    if service_data:
        service.host = _as_str(service_data.get("host")) or service.host
        service.port = _as_int(service_data.get("port")) or service.port
        timeout = _as_float(service_data.get("request_timeout"))
        if timeout is not None:
            service.request_timeout = timeout

    return RepoDocConfig(
        llm=llm,
        github=github,
        service=service,
        source=config_file if config_file.exists() else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _first_env_value(env: Mapping[str, str], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = env.get(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GitHubConfig",
    "LLMConfig",
    "RepoDocConfig",
    "ServiceConfig",
    "load_config",
]
