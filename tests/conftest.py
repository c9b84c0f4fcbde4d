from __future__ import annotations

import copy
from typing import Any, Callable, Dict

import pytest

from repodoc.llm.runner import LLMRunner
from tests._fixtures.doubles import VALID_DOCUMENTATION, ScriptedTransport


@pytest.fixture
def valid_documentation() -> Dict[str, Any]:
    """A documentation payload that satisfies the schema."""
    return copy.deepcopy(VALID_DOCUMENTATION)


@pytest.fixture
def runner_factory() -> Callable[..., LLMRunner]:
    """Build an ``LLMRunner`` wired to a scripted transport with no backoff delay."""

    def _factory(transport: ScriptedTransport, **kwargs: Any) -> LLMRunner:
        kwargs.setdefault("base_url", "https://llm.test/v1")
        kwargs.setdefault("api_key", "test-key")
        return LLMRunner(
            "test-model",
            runner=transport,
            sleep=lambda _: None,
            **kwargs,
        )

    return _factory
