"""Tests for contextual search query generation."""

from brandcheck.queries import generate_queries
from brandcheck.schemas import VideoSummary


def _summary(**overrides) -> VideoSummary:
    fields = {
        "main_topics": ["sustainability"],
        "key_messages": [],
        "visual_elements": [],
        "target_audience": "Young adults",
        "content_theme": "promotional",
        "tone": "upbeat",
        "cultural_elements": [],
    }
    fields.update(overrides)
    return VideoSummary(**fields)


def test_single_topic_yields_brand_and_topic_queries() -> None:
    queries = generate_queries("Acme", _summary())
    assert len(queries) == 6
    assert "Acme" in queries[0]
    assert "reputation" in queries[0]
    assert all("Acme" in q for q in queries[:4])
    assert all("sustainability" in q for q in queries[4:])


def test_generation_is_deterministic() -> None:
    summary = _summary(
        main_topics=["coffee", "farming"],
        cultural_elements=["Diwali"],
        visual_elements=["red lanterns"],
        tone="Serious",
    )
    assert generate_queries("Acme", summary) == generate_queries("Acme", summary)


def test_sections_appear_in_fixed_order() -> None:
    summary = _summary(
        main_topics=["coffee"],
        cultural_elements=["Diwali"],
        visual_elements=["red lanterns"],
        tone="urgent call to action",
    )
    queries = generate_queries("Acme", summary)
    assert len(queries) == 4 + 2 + 2 + 2 + 2
    assert "coffee" in queries[4] and "coffee" in queries[5]
    assert queries[6].startswith("Diwali") and "appropriation" in queries[6]
    assert queries[8].startswith("red lanterns")
    assert "trending" in queries[10]


def test_limits_topics_cultural_and_visual_elements() -> None:
    summary = _summary(
        main_topics=["a", "b", "c", "d", "e"],
        cultural_elements=["x", "y", "z"],
        visual_elements=["v1", "v2", "v3"],
    )
    queries = generate_queries("Acme", summary)
    assert len(queries) == 4 + 3 * 2 + 2 * 2 + 2 * 2
    assert not any(q.startswith("Business risks associated with d") for q in queries)
    assert not any(q.startswith("z ") for q in queries)
    assert not any(q.startswith("v3 ") for q in queries)


def test_tone_match_is_case_insensitive_substring() -> None:
    base = len(generate_queries("Acme", _summary(tone="calm")))
    assert len(generate_queries("Acme", _summary(tone="SERIOUSLY funny"))) == base + 2
    assert len(generate_queries("Acme", _summary(tone="Urgent"))) == base + 2
