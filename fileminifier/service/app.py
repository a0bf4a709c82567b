"""FastAPI application entrypoint for fileminifier service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..failsafe import safe_minify
from ..models import RunSummary
from ..orchestrator import Orchestrator
from ..progress import NullProgress
from ..transforms import resolve_kind


class MinifyRequest(BaseModel):
    kind: str
    text: str


class MinifyResponse(BaseModel):
    kind: str
    text: str
    original_size: int
    minified_size: int


class ProcessRequest(BaseModel):
    source: str
    output: Optional[str] = None
    combine: bool = False
    framework: Optional[str] = None


class ProcessResponse(BaseModel):
    ok: bool
    total: int
    succeeded: int
    skipped: int
    failed: int
    bytes_saved: int
    output_path: Optional[str] = None
    output_size: Optional[int] = None
    group_counts: Dict[str, int] = {}
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator(progress=NullProgress())


def _summary_response(summary: RunSummary) -> ProcessResponse:
    return ProcessResponse(
        ok=summary.ok,
        total=summary.total,
        succeeded=summary.succeeded,
        skipped=summary.skipped,
        failed=summary.failed,
        bytes_saved=summary.bytes_saved,
        output_path=str(summary.output_path) if summary.output_path else None,
        output_size=summary.output_size,
        group_counts=dict(summary.group_counts),
        error=summary.error,
    )


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing minification operations."""

    app = FastAPI(title="FileMinifier Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # A fresh orchestrator per request keeps config and progress state isolated.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/minify", response_model=MinifyResponse)
    async def minify_text(payload: MinifyRequest) -> MinifyResponse:
        kind = resolve_kind(payload.kind)
        minified = safe_minify(kind, payload.text)
        return MinifyResponse(
            kind=kind.value,
            text=minified,
            original_size=len(payload.text.encode("utf-8")),
            minified_size=len(minified.encode("utf-8")),
        )

    @app.post("/process", response_model=ProcessResponse)
    async def process_path(
        payload: ProcessRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ProcessResponse:
        source = Path(payload.source).expanduser()
        if not source.exists():
            raise FileNotFoundError(f"Source not found: {payload.source}")

        def _run_process() -> RunSummary:
            return orchestrator.process(
                source,
                payload.output,
                combine=payload.combine,
                framework=payload.framework,
            )

        loop = asyncio.get_running_loop()
        summary = await loop.run_in_executor(None, _run_process)
        return _summary_response(summary)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
