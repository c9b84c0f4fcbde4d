"""Error taxonomy for the documentation pipeline.

Every stage raises one of these and lets it propagate; the request boundary
(service handler or CLI) turns it into ``public_message`` plus
``status_code``. The exception text itself may carry upstream detail and is
only ever logged.
"""

from __future__ import annotations

from typing import Optional


class RepoDocError(RuntimeError):
    """Base class for pipeline failures with a sanitized public description."""

    kind = "internal_error"
    status_code = 500
    public_message = "Unknown server error"


class InvalidInput(RepoDocError):
    """Missing or malformed repository reference."""

    kind = "invalid_input"
    status_code = 400

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class ConfigurationError(RepoDocError):
    """Required credentials or endpoints are not configured."""

    kind = "configuration_error"
    status_code = 500
    public_message = "Server is missing required configuration"


class UpstreamAuthError(RepoDocError):
    """An external API rejected our credentials."""

    kind = "upstream_auth_error"
    status_code = 502
    public_message = "Upstream service rejected our credentials"

    def __init__(self, message: str, *, service: str) -> None:
        super().__init__(message)
        self.service = service


class UpstreamRequestError(RepoDocError):
    """An external API answered with a non-success status or was unreachable."""

    kind = "upstream_request_error"
    status_code = 502
    public_message = "Upstream service request failed"

    def __init__(
        self,
        message: str,
        *,
        service: str,
        status: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.service = service
        self.status = status
        self.body = body

    @property
    def retryable(self) -> bool:
        return self.status is None or self.status == 429 or self.status >= 500


class MalformedModelOutput(RepoDocError):
    """The model response contains no parseable JSON object."""

    kind = "malformed_model_output"
    status_code = 502
    public_message = "Language model returned malformed output"


class SchemaValidationError(RepoDocError):
    """Parsed model output does not satisfy the documentation schema."""

    kind = "schema_validation_error"
    status_code = 502
    public_message = "Language model output did not match the documentation schema"

    def __init__(self, message: str, *, field_path: str) -> None:
        super().__init__(message)
        self.field_path = field_path


class EmptyResult(RepoDocError):
    """The synthesizer produced no content."""

    kind = "empty_result"
    status_code = 400
    public_message = "Documentation generation failed"


class DeadlineExceeded(RepoDocError):
    """The caller-supplied deadline elapsed before the pipeline finished."""

    kind = "deadline_exceeded"
    status_code = 504
    public_message = "Documentation generation timed out"


__all__ = [
    "ConfigurationError",
    "DeadlineExceeded",
    "EmptyResult",
    "InvalidInput",
    "MalformedModelOutput",
    "RepoDocError",
    "SchemaValidationError",
    "UpstreamAuthError",
    "UpstreamRequestError",
]
