"""Client for OpenAI-compatible chat completion endpoints (Groq by default)."""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from http.client import HTTPException
from typing import Callable, Optional, Sequence
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from ..errors import (
    ConfigurationError,
    DeadlineExceeded,
    UpstreamAuthError,
    UpstreamRequestError,
)
from ..logging import get_logger

_AUTO = object()
_SERVICE = "llm"

logger = get_logger("llm")


@dataclass
class LLMRequest:
    """Represents a single chat completion request."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: str
    api_key: str
    request_timeout: Optional[float]


class LLMRunner:
    """Executes prompts against the configured chat completion endpoint."""

    DEFAULT_MODEL = "llama-3.1-8b-instant"
    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
    ENV_MODEL_KEYS = ("REPODOC_LLM_MODEL", "GROQ_MODEL")
    ENV_BASE_URL_KEYS = ("REPODOC_LLM_BASE_URL", "GROQ_API_URL", "OPENAI_BASE_URL")
    ENV_API_KEY_KEYS = ("REPODOC_LLM_API_KEY", "GROQ_API_KEY", "OPENAI_API_KEY")

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: str | None | object = _AUTO,
        api_key: str | None | object = _AUTO,
        temperature: Optional[float] = 0.0,
        max_tokens: Optional[int] = 4096,
        request_timeout: Optional[float] = 60.0,
        max_retries: int = 2,
        backoff_factor: float = 0.5,
        runner: Callable[[LLMRequest], str] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.model = model or self._first_env_value(self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL
        self.base_url = self._resolve_base_url(base_url)
        self.api_key = self._resolve_api_key(api_key)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self.max_retries = max(0, max_retries)
        self.backoff_factor = backoff_factor
        self._runner = runner or self._http_runner
        self._sleep = sleep
        self._monotonic = monotonic

    def run(
        self,
        prompt: str,
        *,
        system: str | None = None,
        timeout: float | None = None,
    ) -> str:
        """Send the prompt and return the response text.

        ``timeout`` is the budget for the whole call, retries and backoff
        included; the orchestrator uses it to pass on whatever is left of the
        request deadline. Each attempt is capped by the configured request
        timeout and by what remains of that budget.
        """
        if not self.api_key:
            raise ConfigurationError(
                "No language model API key configured; set REPODOC_LLM_API_KEY or GROQ_API_KEY"
            )
        if not self.base_url:
            raise ConfigurationError("No language model base URL configured")

        now = self._monotonic()
        deadline = now + timeout if timeout is not None else None

        attempt = 0
        while True:
            request = LLMRequest(
                prompt=prompt,
                system=system,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                base_url=self.base_url,
                api_key=self.api_key,
                request_timeout=self._attempt_timeout(deadline, now),
            )
            try:
                return self._runner(request)
            except UpstreamRequestError as exc:
                if not exc.retryable or attempt >= self.max_retries:
                    raise
                delay = self.backoff_factor * (2**attempt)
                if deadline is not None and self._monotonic() + delay >= deadline:
                    raise DeadlineExceeded(
                        f"LLM request failed ({exc}) with no time left to retry"
                    ) from exc
                attempt += 1
                logger.warning(
                    "LLM request failed (%s); retrying in %.1fs (attempt %d/%d)",
                    exc,
                    delay,
                    attempt,
                    self.max_retries,
                )
                self._sleep(delay)
                now = self._monotonic()

    def _attempt_timeout(self, deadline: float | None, now: float) -> Optional[float]:
        if deadline is None:
            return self.request_timeout
        remaining = deadline - now
        if remaining <= 0:
            raise DeadlineExceeded("No time left for the language model call")
        if self.request_timeout is None:
            return remaining
        return min(remaining, self.request_timeout)

    @staticmethod
    def _http_runner(request: LLMRequest) -> str:
        endpoint = LLMRunner._completions_endpoint(request.base_url)
        payload: dict[str, object] = {
            "model": request.model,
            "messages": LLMRunner._build_messages(request.system, request.prompt),
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens

        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {request.api_key}",
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")
        timeout = request.request_timeout or 60.0

        try:
            with urlopen(http_request, timeout=timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or str(exc.reason)
            if exc.code in (401, 403):
                raise UpstreamAuthError(
                    f"LLM API rejected credentials with status {exc.code}: {message}",
                    service=_SERVICE,
                ) from exc
            raise UpstreamRequestError(
                f"LLM API Error {exc.code}: {message}",
                service=_SERVICE,
                status=exc.code,
                body=detail,
            ) from exc
        except (OSError, HTTPException) as exc:
            # URLError, timeouts, resets and dropped connections while reading.
            reason = getattr(exc, "reason", exc)
            raise UpstreamRequestError(
                f"LLM API unreachable: {reason}", service=_SERVICE
            ) from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise UpstreamRequestError(
                "LLM API returned a non-JSON envelope",
                service=_SERVICE,
                status=200,
                body=raw[:500].decode("utf-8", errors="ignore"),
            ) from exc

        return LLMRunner._extract_content(response_payload).strip()

    @staticmethod
    def _completions_endpoint(base_url: str) -> str:
        normalized = base_url.rstrip("/")
        if normalized.endswith("/chat/completions"):
            return normalized
        return f"{normalized}/chat/completions"

    @staticmethod
    def _build_messages(system: str | None, prompt: str) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_content(payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        text = first.get("text")
        if isinstance(text, str):
            return text
        return ""

    def _resolve_base_url(self, base_url: str | None | object) -> str | None:
        if base_url is None:
            return None
        if base_url is not _AUTO:
            return str(base_url).rstrip("/")
        env_value = self._first_env_value(self.ENV_BASE_URL_KEYS)
        return (env_value or self.DEFAULT_BASE_URL).rstrip("/")

    def _resolve_api_key(self, api_key: str | None | object) -> str | None:
        if api_key is _AUTO:
            return self._first_env_value(self.ENV_API_KEY_KEYS)
        return api_key  # type: ignore[return-value]

    @staticmethod
    def _first_env_value(keys: Sequence[str]) -> str | None:
        for key in keys:
            value = os.getenv(key)
            if value:
                return value
        return None


__all__ = ["LLMRequest", "LLMRunner"]
