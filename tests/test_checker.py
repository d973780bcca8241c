"""Tests for the technical compliance checker."""

import asyncio

import httpx
import openai
import pytest

from brandcheck.checker import check, parse_issues
from brandcheck.errors import ComplianceCheckError

VIDEO = "https://cdn.example.com/spot.mp4"

ISSUES_REPLY = """Here are the issues:
[
  {"timestamp": 3.2, "issue": "Text color #FF0000 violates palette", "suggestedFix": "Use #1E40AF",
   "severity": "high", "category": "visual"},
  {"timestamp": 15.8, "issue": "Audio exceeds -12dB", "suggestedFix": "Lower to -14dB",
   "severity": "medium", "category": "audio"}
]"""


def _fake_complete(reply: str):
    async def fake(system_prompt, content, temperature=0.2):
        return reply
    return fake


def test_parse_issues_reads_array_in_prose() -> None:
    issues = parse_issues(ISSUES_REPLY)
    assert [i.timestamp for i in issues] == [3.2, 15.8]
    assert issues[0].suggested_fix == "Use #1E40AF"
    assert issues[0].source_url is None


def test_parse_issues_accepts_wrapped_object() -> None:
    issues = parse_issues('{"issues": []}')
    assert issues == []


def test_parse_issues_rejects_contextual_category() -> None:
    reply = (
        '[{"timestamp": 0, "issue": "x", "suggestedFix": "y", '
        '"severity": "low", "category": "contextual-risk"}]'
    )
    with pytest.raises(ValueError):
        parse_issues(reply)


def test_check_returns_issues(monkeypatch) -> None:
    monkeypatch.setattr("brandcheck.llm.complete", _fake_complete(ISSUES_REPLY))
    issues = asyncio.run(check(VIDEO, "Primary color #1E40AF"))
    assert len(issues) == 2
    assert {i.category for i in issues} == {"visual", "audio"}


def test_schema_violation_raises(monkeypatch) -> None:
    monkeypatch.setattr("brandcheck.llm.complete", _fake_complete('[{"timestamp": 1}]'))
    with pytest.raises(ComplianceCheckError):
        asyncio.run(check(VIDEO, "guidelines"))


def test_rate_limit_is_reported_as_quota(monkeypatch) -> None:
    async def limited(system_prompt, content, temperature=0.2):
        request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
        response = httpx.Response(429, request=request)
        raise openai.RateLimitError("Rate limit reached", response=response, body=None)

    monkeypatch.setattr("brandcheck.llm.complete", limited)
    with pytest.raises(ComplianceCheckError) as excinfo:
        asyncio.run(check(VIDEO, "guidelines"))
    assert "quota exceeded" in str(excinfo.value)
