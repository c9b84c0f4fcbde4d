"""FastAPI application exposing documentation generation over HTTP."""

from __future__ import annotations

from typing import Any, Callable, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import RepoDocConfig, load_config
from ..errors import RepoDocError
from ..logging import get_logger
from ..orchestrator import Orchestrator
from ..schemas import GeneratedDocumentation

logger = get_logger("service")


class GenerateDocsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    repo_url: Optional[str] = Field(default=None, alias="repoUrl")


class GenerateDocsResponse(BaseModel):
    documentation: GeneratedDocumentation
    commit_hash: str
    generated_at: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator.from_config(load_config())


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
    *,
    request_timeout: Optional[float] = 120.0,
) -> FastAPI:
    """Create the FastAPI application exposing repodoc operations."""

    app = FastAPI(title="repodoc", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        # Built per request; nothing is shared between requests.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/api/generate-docs", response_model=GenerateDocsResponse)
    async def generate_docs(
        payload: Optional[GenerateDocsRequest] = None,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        repo_url = payload.repo_url if payload is not None else None
        logger.info("Received documentation request for %s", repo_url or "<missing>")
        try:
            result = await orchestrator.agenerate(repo_url, timeout=request_timeout)
        except RepoDocError as exc:
            logger.error("Documentation generation failed [%s]: %s", exc.kind, exc)
            return error_response(exc.status_code, exc.public_message)
        except Exception:
            logger.exception("Unexpected error while generating documentation for %s", repo_url)
            return error_response(500, RepoDocError.public_message)

        return GenerateDocsResponse(
            documentation=result.documentation,
            commit_hash=result.commit_hash,
            generated_at=result.generated_at,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Any, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Rejected malformed request body: %s", exc.errors())
        return error_response(400, "Invalid request body")

    return app


def run_service(
    host: str | None = None,
    port: int | None = None,
    *,
    config: RepoDocConfig | None = None,
) -> None:  # pragma: no cover - integration path
    settings = config or load_config()
    app = create_app(
        lambda: Orchestrator.from_config(settings),
        request_timeout=settings.service.request_timeout,
    )
    uvicorn.run(app, host=host or settings.service.host, port=port or settings.service.port)


__all__ = [
    "GenerateDocsRequest",
    "GenerateDocsResponse",
    "create_app",
    "run_service",
]
