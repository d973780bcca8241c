"""Tests for the HTTP API."""

import json

from fastapi.testclient import TestClient

from brandcheck.api import app
from brandcheck.fallbacks import fallback_summary
from brandcheck.schemas import ComplianceReport, ProgressUpdate

client = TestClient(app)

REQUEST = {
    "video": "https://cdn.example.com/spot.mp4",
    "guidelines": "Logo top-right",
    "brandName": "Acme",
    "enableSensitiveTopicsCheck": False,
}


def _report() -> ComplianceReport:
    return ComplianceReport(video_summary=fallback_summary(), total_issues=0, processing_time=12)


def test_health() -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_check_returns_camel_case_report(monkeypatch) -> None:
    seen = []

    async def fake_check(req, **deps):
        seen.append((req, deps))
        return _report()

    monkeypatch.setattr("brandcheck.api.check_compliance", fake_check)
    resp = client.post("/check", json=REQUEST)
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalIssues"] == 0
    assert body["videoSummary"]["mainTopics"] == ["General content"]
    req, deps = seen[0]
    assert req.brand_name == "Acme"
    assert req.enable_sensitive_topics_check is False
    assert deps == {"resolve_local": False}


def test_check_failure_is_500(monkeypatch) -> None:
    async def fake_check(req, **deps):
        raise RuntimeError("boom")

    monkeypatch.setattr("brandcheck.api.check_compliance", fake_check)
    resp = client.post("/check", json=REQUEST)
    assert resp.status_code == 500
    assert "boom" in resp.json()["detail"]


def test_stream_emits_ndjson_progress_then_report(monkeypatch) -> None:
    async def fake_stream(req, **deps):
        yield ProgressUpdate(step="video-analysis", progress=20, message="Analyzing...")
        yield ProgressUpdate(step="complete", progress=100, message="done")
        yield _report()

    monkeypatch.setattr("brandcheck.api.check_compliance_stream", fake_stream)
    resp = client.post("/check/stream", json=REQUEST)
    lines = [json.loads(line) for line in resp.text.splitlines() if line]
    assert [line["type"] for line in lines] == ["progress", "progress", "report"]
    assert lines[0]["step"] == "video-analysis"
    assert lines[-1]["processingTime"] == 12


def test_stream_reports_errors_inline(monkeypatch) -> None:
    async def fake_stream(req, **deps):
        yield ProgressUpdate(step="error", progress=0, message="Error during analysis: boom")
        raise RuntimeError("boom")

    monkeypatch.setattr("brandcheck.api.check_compliance_stream", fake_stream)
    resp = client.post("/check/stream", json=REQUEST)
    lines = [json.loads(line) for line in resp.text.splitlines() if line]
    assert lines[0]["step"] == "error"
    assert lines[-1] == {"type": "error", "message": "boom"}


def test_queries_endpoint() -> None:
    resp = client.post("/queries", json={
        "brand_name": "Acme",
        "video_summary": {"mainTopics": ["sustainability"], "tone": "calm"},
    })
    assert resp.status_code == 200
    assert len(resp.json()["queries"]) == 6


def test_local_video_paths_are_rejected(monkeypatch, tmp_path) -> None:
    secret = tmp_path / "secret.txt"
    secret.write_text("TOP-SECRET")
    calls = []

    async def fake_complete(system_prompt, content, temperature=0.2):
        calls.append(content)
        return "[]"

    monkeypatch.setattr("brandcheck.llm.complete", fake_complete)
    body = {**REQUEST, "video": str(secret)}
    for path in ("/check", "/check/stream"):
        resp = client.post(path, json=body)
        assert resp.status_code == 422
        assert "data URI" in resp.json()["detail"]
    assert calls == []


def test_file_urls_are_rejected() -> None:
    resp = client.post("/check", json={**REQUEST, "video": "file:///etc/passwd"})
    assert resp.status_code == 422
