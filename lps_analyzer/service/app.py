"""FastAPI application exposing the palindrome comparison.

The routes keep the payload shapes the browser client expects:
``POST /runAlgorithms`` for direct text and ``POST /upload`` for text files.
Request latency and per-algorithm execution time are exported in Prometheus
format on ``/metrics``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, Histogram, generate_latest
from pydantic import BaseModel

from lps_analyzer.benchmarking.comparison import ComparisonReport, run_comparison
from lps_analyzer.benchmarking.config import HarnessConfig
from lps_analyzer.benchmarking.harness import AlgorithmResult
from lps_analyzer.errors import InvalidInputError

__all__ = [
    "ALGORITHM_DURATION",
    "REQUEST_LATENCY",
    "RunAlgorithmsRequest",
    "ServiceSettings",
    "app",
    "build_response",
    "create_app",
]

LOGGER = logging.getLogger("lps_analyzer.service")

REQUEST_LATENCY = Histogram(
    "lps_request_latency_seconds",
    "HTTP request latency",
    labelnames=("method", "endpoint"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 30.0, 120.0),
)
ALGORITHM_DURATION = Histogram(
    "lps_algorithm_execution_ms",
    "Trimmed mean execution time per algorithm in milliseconds",
    labelnames=("algorithm", "variant"),
    buckets=(0.1, 1.0, 5.0, 10.0, 50.0, 100.0, 500.0, 1_000.0, 10_000.0, 60_000.0),
)

PREVIEW_CHARS = 100


@dataclass(frozen=True)
class ServiceSettings:
    """Limits applied by the HTTP layer before the core is invoked."""

    max_body_bytes: int = 10 * 1024 * 1024
    max_upload_bytes: int = 10 * 1024 * 1024
    max_file_chars: int = 500_000
    allowed_extensions: tuple[str, ...] = (".txt", ".md", ".text")
    allowed_content_types: tuple[str, ...] = (
        "text/plain",
        "text/markdown",
        "application/octet-stream",
    )


class RunAlgorithmsRequest(BaseModel):
    """Body of ``POST /runAlgorithms``."""

    inputString: Any = None


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


def _result_payload(result: AlgorithmResult) -> Dict[str, Any]:
    return {
        "lps": result.substring,
        "executionTime": round(result.execution_time_ms, 2),
        "memoryUsage": round(result.memory_delta_kb, 2),
        "timedOut": result.timed_out,
        "memoryMeasurementIssue": result.measurement_unreliable,
        "error": result.error,
        "iterations": result.iterations,
        "variant": result.variant,
        "palindromeLength": result.palindrome_length,
    }


def build_response(text: str, report: ComparisonReport) -> Dict[str, Any]:
    """Return the JSON payload expected by the browser client."""

    preview = text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")
    return {
        "input": preview,
        "fullLength": len(text),
        "executionOrder": list(report.execution_order),
        "lengthsAgree": report.lengths_agree,
        "results": {name: _result_payload(result) for name, result in report.results.items()},
    }


def create_app(
    config: Optional[HarnessConfig] = None,
    settings: Optional[ServiceSettings] = None,
) -> FastAPI:
    """Create a configured application instance.

    *config* is resolved from the environment when omitted and every request
    gets its own harness, so no measurement state is shared across requests.
    """

    harness_config = config if config is not None else HarnessConfig.from_env()
    limits = settings or ServiceSettings()
    app = FastAPI(title="LPS Analyzer")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.middleware("http")
    async def metrics_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start
        REQUEST_LATENCY.labels(request.method, request.url.path).observe(duration)
        return response

    @app.middleware("http")
    async def body_limit_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        declared = request.headers.get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > limits.max_body_bytes:
            LOGGER.info("Rejected oversized request", extra={"content_length": int(declared)})
            return _error(
                413,
                "Request entity too large. Please reduce the size of your input text "
                "or use file upload instead.",
            )
        return await call_next(request)

    async def _compare(text: str) -> JSONResponse:
        try:
            report = await run_in_threadpool(run_comparison, text, config=harness_config)
        except InvalidInputError as exc:
            return _error(400, str(exc))
        except Exception as exc:
            LOGGER.exception("Algorithm error")
            return _error(500, str(exc) or "Error processing the input")
        for result in report.results.values():
            if result.ok and result.iterations:
                ALGORITHM_DURATION.labels(result.algorithm, result.variant).observe(
                    result.execution_time_ms
                )
        return JSONResponse(build_response(text, report))

    @app.post("/runAlgorithms")
    async def run_algorithms(payload: RunAlgorithmsRequest) -> JSONResponse:
        text = payload.inputString
        if text is None or text == "":
            return _error(400, "Input string is required")
        if not isinstance(text, str):
            return _error(400, "Input string must be a string")
        LOGGER.info("Processing input text", extra={"characters": len(text)})
        return await _compare(text)

    @app.post("/upload")
    async def upload(file: UploadFile = File(...)) -> JSONResponse:
        filename = file.filename or ""
        extension = PurePath(filename).suffix.lower()
        content_type = (file.content_type or "").split(";")[0].strip().lower()
        if (
            extension not in limits.allowed_extensions
            and content_type not in limits.allowed_content_types
        ):
            return _error(400, "Invalid file type. Only .txt and .md files are allowed")

        try:
            if file.size is not None and file.size > limits.max_upload_bytes:
                return _error(413, "File exceeds the maximum upload size")
            # One byte past the limit is enough to reject a body of unknown size.
            data = await file.read(limits.max_upload_bytes + 1)
        finally:
            await file.close()
        LOGGER.info("File uploaded", extra={"upload_name": filename, "size": len(data)})
        if not data:
            return _error(400, "No file uploaded")
        if len(data) > limits.max_upload_bytes:
            return _error(413, "File exceeds the maximum upload size")
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return _error(400, "Uploaded file must be UTF-8 encoded text")
        if len(text) > limits.max_file_chars:
            return _error(
                413,
                f"File too large to process efficiently (max {limits.max_file_chars} characters)",
                suggestion="Try a smaller file or extract just the portion you want to analyze",
            )
        return await _compare(text)

    @app.get("/health/live")
    async def live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = generate_latest(REQUEST_LATENCY) + generate_latest(ALGORITHM_DURATION)
        return Response(payload, media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()
