"""Tests for repodoc.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from repodoc.config import ConfigError, RepoDocConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, RepoDocConfig)
    assert config.source is None
    assert config.llm.model is None
    assert config.llm.api_key is None
    assert config.github.token is None
    assert config.service.host == "127.0.0.1"
    assert config.service.port == 8000
    assert config.service.request_timeout == 120.0


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / "repodoc.yml"
    config_file.write_text(
        """
llm:
  model: "llama-3.3-70b-versatile"
  base_url: "https://api.groq.com/openai/v1"
  api_key: "test-key"
  temperature: 0.2
  max_tokens: 2048
  request_timeout: 45
  max_retries: 4
  backoff_factor: 1.5
github:
  token: "ghp_from_file"
  request_timeout: 20
  max_retries: 5
service:
  host: "0.0.0.0"
  port: 9000
  request_timeout: 90
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={"GITHUB_TOKEN": "ghp_from_env"})

    assert config.source == config_file.resolve()
    assert config.llm.model == "llama-3.3-70b-versatile"
    assert config.llm.base_url == "https://api.groq.com/openai/v1"
    assert config.llm.api_key == "test-key"
    assert config.llm.temperature == pytest.approx(0.2)
    assert config.llm.max_tokens == 2048
    assert config.llm.request_timeout == pytest.approx(45.0)
    assert config.llm.max_retries == 4
    assert config.llm.backoff_factor == pytest.approx(1.5)
    assert config.github.token == "ghp_from_file"
    assert config.github.request_timeout == pytest.approx(20.0)
    assert config.github.max_retries == 5
    assert config.service.host == "0.0.0.0"
    assert config.service.port == 9000
    assert config.service.request_timeout == pytest.approx(90.0)


def test_explicit_file_path_is_accepted(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("llm:\n  model: custom-model\n", encoding="utf-8")

    config = load_config(config_file, environ={})

    assert config.llm.model == "custom-model"
    assert config.source == config_file.resolve()


@pytest.mark.parametrize(
    ("environ", "expected"),
    [
        ({"REPODOC_GITHUB_TOKEN": "ghp_primary", "GITHUB_TOKEN": "ghp_secondary"}, "ghp_primary"),
        ({"GITHUB_TOKEN": "ghp_secondary"}, "ghp_secondary"),
        ({"REPODOC_GITHUB_TOKEN": "", "GITHUB_TOKEN": "ghp_secondary"}, "ghp_secondary"),
    ],
)
def test_github_token_falls_back_to_environment(tmp_path: Path, environ, expected) -> None:
    config = load_config(tmp_path, environ=environ)

    assert config.github.token == expected


def test_wrongly_typed_values_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "repodoc.yml").write_text(
        """
llm:
  temperature: true
  max_tokens: "lots"
  model: [a, b]
service: "not a mapping"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={})

    assert config.llm.temperature is None
    assert config.llm.max_tokens is None
    assert config.llm.model is None
    assert config.service.port == 8000


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / "repodoc.yml").write_text("   \n", encoding="utf-8")

    config = load_config(tmp_path, environ={})

    assert config.llm.model is None
    assert config.source is not None


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "repodoc.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path, environ={})


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "repodoc.yml").write_text("llm: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path, environ={})
