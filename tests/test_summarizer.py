"""Tests for the video summarizer and its fallback."""

import asyncio

import pytest

from brandcheck import config, llm, summarizer
from brandcheck.fallbacks import fallback_summary
from brandcheck.stages import StageKind

VIDEO = "https://cdn.example.com/spot.mp4"

SUMMARY_REPLY = """```json
{
  "mainTopics": ["sustainability", "recycling"],
  "keyMessages": ["Recycle more"],
  "visualElements": ["green leaves"],
  "targetAudience": "Young adults",
  "contentTheme": "promotional",
  "productsMentioned": null,
  "tone": "upbeat",
  "culturalElements": ["Earth Day"]
}
```"""


@pytest.fixture(autouse=True)
def _no_env_file(monkeypatch):
    monkeypatch.setattr(config, "_loaded", True)
    for key in ("BRANDCHECK_LLM_API_KEY", "GROQ_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(key, raising=False)


def _fake_complete(reply: str, seen: list | None = None):
    async def fake(system_prompt, content, temperature=0.2):
        if seen is not None:
            seen.append((content, temperature))
        return reply
    return fake


def test_parses_fenced_summary(monkeypatch) -> None:
    seen = []
    monkeypatch.setattr(llm, "complete", _fake_complete(SUMMARY_REPLY, seen))
    outcome = asyncio.run(summarizer.summarize_outcome(VIDEO))
    assert outcome.ok
    assert outcome.value.main_topics == ["sustainability", "recycling"]
    assert outcome.value.products_mentioned == []
    assert outcome.value.cultural_elements == ["Earth Day"]

    content, temperature = seen[0]
    assert temperature == 0.3
    assert "video/mp4" in content[0]["text"]
    assert content[1]["image_url"]["url"] == VIDEO


def test_missing_key_falls_back() -> None:
    outcome = asyncio.run(summarizer.summarize_outcome(VIDEO))
    assert outcome.kind is StageKind.FALLBACK
    assert outcome.value == fallback_summary()


def test_prose_reply_falls_back(monkeypatch) -> None:
    monkeypatch.setattr(llm, "complete", _fake_complete("I cannot watch videos, sorry."))
    outcome = asyncio.run(summarizer.summarize_outcome(VIDEO))
    assert outcome.kind is StageKind.FALLBACK
    assert isinstance(outcome.error, ValueError)


def test_wrong_shape_falls_back(monkeypatch) -> None:
    monkeypatch.setattr(llm, "complete", _fake_complete('{"mainTopics": [], "tone": "calm"}'))
    summary = asyncio.run(summarizer.summarize(VIDEO))
    assert summary == fallback_summary()


def test_api_error_falls_back(monkeypatch) -> None:
    async def boom(system_prompt, content, temperature=0.2):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(llm, "complete", boom)
    summary = asyncio.run(summarizer.summarize(VIDEO, "video/webm"))
    assert summary.main_topics == ["General content"]


def test_finds_summary_inside_prose(monkeypatch) -> None:
    reply = 'Sure! {"mainTopics": ["street food"], "tone": "casual {relaxed}"} Hope this helps'
    monkeypatch.setattr(llm, "complete", _fake_complete(reply))
    outcome = asyncio.run(summarizer.summarize_outcome(VIDEO))
    assert outcome.ok
    assert outcome.value.main_topics == ["street food"]
    assert outcome.value.tone == "casual {relaxed}"
