from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from lps_analyzer.benchmarking import HarnessConfig
from lps_analyzer.service import ServiceSettings, create_app

FAST_CONFIG = HarnessConfig(
    settle_seconds=0.0,
    collect_garbage=False,
    iteration_tiers=((1_000, 2),),
    seed=5,
)


def _client(settings: ServiceSettings | None = None) -> AsyncClient:
    app = create_app(FAST_CONFIG, settings)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_run_algorithms_returns_all_results() -> None:
    async with _client() as client:
        response = await client.post("/runAlgorithms", json={"inputString": "babad"})

    assert response.status_code == 200
    body = response.json()
    assert body["input"] == "babad"
    assert body["fullLength"] == 5
    assert body["executionOrder"][0] == "manacher"
    assert body["lengthsAgree"] is True
    assert set(body["results"]) == {"naive", "dp", "manacher"}
    for entry in body["results"].values():
        assert entry["lps"] == "bab"
        assert entry["timedOut"] is False
        assert entry["error"] is None
        assert entry["iterations"] == 2
        assert isinstance(entry["executionTime"], float)
        assert isinstance(entry["memoryMeasurementIssue"], bool)


@pytest.mark.asyncio
async def test_long_input_is_previewed() -> None:
    text = "ab" * 80
    async with _client() as client:
        response = await client.post("/runAlgorithms", json={"inputString": text})

    body = response.json()
    assert body["input"] == text[:100] + "..."
    assert body["fullLength"] == 160


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"inputString": ""}, {"inputString": None}])
async def test_missing_input_is_rejected(payload: dict) -> None:
    async with _client() as client:
        response = await client.post("/runAlgorithms", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Input string is required"}


@pytest.mark.asyncio
async def test_non_string_input_is_rejected() -> None:
    async with _client() as client:
        response = await client.post("/runAlgorithms", json={"inputString": 12321})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_punctuation_only_input_returns_empty_results() -> None:
    async with _client() as client:
        response = await client.post("/runAlgorithms", json={"inputString": "?!"})

    assert response.status_code == 200
    assert {entry["lps"] for entry in response.json()["results"].values()} == {""}


@pytest.mark.asyncio
async def test_oversized_body_is_rejected() -> None:
    async with _client(ServiceSettings(max_body_bytes=32)) as client:
        response = await client.post("/runAlgorithms", json={"inputString": "a" * 100})

    assert response.status_code == 413
    assert "too large" in response.json()["error"]


@pytest.mark.asyncio
async def test_upload_text_file() -> None:
    async with _client() as client:
        response = await client.post(
            "/upload",
            files={"file": ("notes.txt", b"Was it a car or a cat I saw", "text/plain")},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["results"]["naive"]["lps"] == "Was it a car or a cat I saw"
    assert body["lengthsAgree"] is True


@pytest.mark.asyncio
async def test_upload_rejects_unknown_file_types() -> None:
    async with _client() as client:
        response = await client.post(
            "/upload", files={"file": ("image.png", b"\x89PNG", "image/png")}
        )

    assert response.status_code == 400
    assert "Invalid file type" in response.json()["error"]


@pytest.mark.asyncio
async def test_upload_rejects_non_utf8_content() -> None:
    async with _client() as client:
        response = await client.post(
            "/upload", files={"file": ("latin.txt", "café".encode("latin-1"), "text/plain")}
        )

    assert response.status_code == 400
    assert "UTF-8" in response.json()["error"]


@pytest.mark.asyncio
async def test_upload_rejects_too_many_characters() -> None:
    async with _client(ServiceSettings(max_file_chars=10)) as client:
        response = await client.post(
            "/upload", files={"file": ("big.md", b"abcdefghijklmnop", "text/markdown")}
        )

    assert response.status_code == 413
    assert response.json()["suggestion"].startswith("Try a smaller file")


@pytest.mark.asyncio
async def test_upload_over_the_byte_limit_is_rejected_before_decoding() -> None:
    async with _client(ServiceSettings(max_upload_bytes=8)) as client:
        response = await client.post(
            "/upload", files={"file": ("big.txt", b"racecar racecar", "text/plain")}
        )

    assert response.status_code == 413
    assert "maximum upload size" in response.json()["error"]


@pytest.mark.asyncio
async def test_upload_at_the_byte_limit_is_accepted() -> None:
    async with _client(ServiceSettings(max_upload_bytes=7)) as client:
        response = await client.post(
            "/upload", files={"file": ("word.txt", b"racecar", "text/plain")}
        )

    assert response.status_code == 200
    assert response.json()["results"]["manacher"]["lps"] == "racecar"


@pytest.mark.asyncio
async def test_health_and_metrics_endpoints() -> None:
    async with _client() as client:
        live = await client.get("/health/live")
        ready = await client.get("/health/ready")
        await client.post("/runAlgorithms", json={"inputString": "noon"})
        metrics = await client.get("/metrics")

    assert live.json() == {"status": "alive"}
    assert ready.json() == {"status": "ready"}
    assert metrics.status_code == 200
    body = metrics.text
    assert any(
        line.startswith("lps_request_latency_seconds_count") and 'endpoint="/runAlgorithms"' in line
        for line in body.splitlines()
    )
    assert "lps_algorithm_execution_ms_count" in body
