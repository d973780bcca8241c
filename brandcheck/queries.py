"""Search query generation for the contextual risk check.

Pure and deterministic: the same brand name and summary always give the
same queries in the same order.
"""

from __future__ import annotations

from .schemas import VideoSummary

MAX_TOPICS = 3
MAX_CULTURAL_ELEMENTS = 2
MAX_VISUAL_ELEMENTS = 2

_BRAND_TEMPLATES = (
    "Recent news about {brand} business impact reputation damage:",
    "Recent news about {brand} legal issues regulatory problems:",
    "Recent news about {brand} customer complaints boycott:",
    "Recent news about {brand} financial losses revenue impact:",
)

_TOPIC_TEMPLATES = (
    "Business risks associated with {topic} industry impact:",
    "Legal regulatory issues with {topic} compliance problems:",
)

_CULTURAL_TEMPLATES = (
    "{element} cultural appropriation sensitivity backlash:",
    "{element} cultural insensitivity business impact:",
)

_VISUAL_TEMPLATES = (
    "{element} problematic imagery business impact:",
    "{element} visual content legal issues:",
)

_TRENDING_QUERIES = (
    "Current business risks trending news brand impact:",
    "Recent regulatory changes affecting brands:",
)

_SERIOUS_TONES = ("urgent", "serious")


def generate_queries(brand_name: str, summary: VideoSummary) -> list[str]:
    """Derive the ordered list of risk search queries for a brand and video."""
    queries = [t.format(brand=brand_name) for t in _BRAND_TEMPLATES]

    for topic in summary.main_topics[:MAX_TOPICS]:
        queries.extend(t.format(topic=topic) for t in _TOPIC_TEMPLATES)

    for element in (summary.cultural_elements or [])[:MAX_CULTURAL_ELEMENTS]:
        queries.extend(t.format(element=element) for t in _CULTURAL_TEMPLATES)

    for element in summary.visual_elements[:MAX_VISUAL_ELEMENTS]:
        queries.extend(t.format(element=element) for t in _VISUAL_TEMPLATES)

    tone = summary.tone.lower()
    if any(word in tone for word in _SERIOUS_TONES):
        queries.extend(_TRENDING_QUERIES)

    return queries
