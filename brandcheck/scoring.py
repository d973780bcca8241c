"""Finding scorer: turns one raw search hit into a finding, or rejects it.

The filter is deliberately strict; most hits are discarded:
  1. relevance to the video (theme, topics, cultural elements) must reach 0.1
  2. the risk level must be high or critical
  3. the text must mention at least one business-impact term

Relevance is additive and not clamped, so a hit matching many topics can
score above 1.0. Aggregation ranks on the raw value.
"""

from __future__ import annotations

import logging

from .schemas import Finding, RawSearchHit, Severity, VideoSummary

logger = logging.getLogger(__name__)

MIN_RELEVANCE = 0.1
THEME_WEIGHT = 0.3
TOPIC_WEIGHT = 0.2
CULTURAL_WEIGHT = 0.2

TOPIC_NAME_MAX = 100
DESCRIPTION_MAX = 300

# Checked in this order; the first level with any match wins.
RISK_KEYWORDS: dict[Severity, tuple[str, ...]] = {
    "critical": (
        "lawsuit", "boycott", "crisis", "illegal", "fraud", "corruption",
        "criminal", "bankruptcy", "shutdown", "banned", "prosecution",
    ),
    "high": (
        "backlash", "criticism", "protest", "negative", "accusation", "allegation",
        "investigation", "resignation", "fired", "terminated", "recall", "withdrawal",
    ),
    "medium": (
        "concern", "issue", "problem", "debate", "discussion", "question",
        "challenge", "complaint", "review",
    ),
}

REPORTABLE_LEVELS = frozenset({"high", "critical"})

BUSINESS_IMPACT_TERMS = (
    "revenue", "sales", "profit", "loss", "stock", "market", "shareholder", "investor",
    "customer", "client", "user", "subscriber", "audience", "viewer", "follower",
    "regulatory", "compliance", "legal", "court", "settlement", "fine", "penalty",
    "partnership", "sponsor", "advertiser", "brand", "reputation", "pr", "public relations",
    "employee", "staff", "workforce", "hiring", "layoff", "termination",
)

REVIEW_RECOMMENDATION = (
    "Consider reviewing content for potential brand impact and cultural sensitivity"
)
MONITOR_RECOMMENDATION = "Monitor this topic for potential relevance to your brand"


def relevance(text: str, summary: VideoSummary) -> float:
    """Additive overlap score between lowercased hit text and the summary."""
    score = 0.0
    theme = summary.content_theme.lower()
    if theme and theme in text:
        score += THEME_WEIGHT
    for topic in summary.main_topics:
        if topic and topic.lower() in text:
            score += TOPIC_WEIGHT
    for element in summary.cultural_elements or []:
        if element and element.lower() in text:
            score += CULTURAL_WEIGHT
    return score


def classify_risk(text: str) -> Severity:
    for level, keywords in RISK_KEYWORDS.items():
        if any(k in text for k in keywords):
            return level
    return "low"


def has_business_impact(text: str) -> bool:
    return any(term in text for term in BUSINESS_IMPACT_TERMS)


def recommendation_for(level: Severity) -> str:
    return REVIEW_RECOMMENDATION if level in REPORTABLE_LEVELS else MONITOR_RECOMMENDATION


def _truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def score(hit: RawSearchHit, summary: VideoSummary) -> Finding | None:
    """Score a search hit against the video summary. Returns None when rejected."""
    combined = f"{hit.title} {hit.text}".lower()

    relevance_score = relevance(combined, summary)
    if relevance_score < MIN_RELEVANCE:
        logger.debug("Dropping hit (relevance %.2f): %s", relevance_score, hit.title)
        return None

    risk_level = classify_risk(combined)
    if risk_level not in REPORTABLE_LEVELS:
        logger.debug("Dropping hit (risk %s): %s", risk_level, hit.title)
        return None

    if not has_business_impact(combined):
        logger.debug("Dropping hit (no business impact): %s", hit.title)
        return None

    logger.debug("Keeping hit (risk %s, relevance %.2f): %s", risk_level, relevance_score, hit.title)
    return Finding(
        topic_name=hit.title[:TOPIC_NAME_MAX],
        description=_truncate(hit.text, DESCRIPTION_MAX),
        url=hit.url,
        published_date=hit.published_date,
        risk_level=risk_level,
        recommendation=recommendation_for(risk_level),
        relevance_score=relevance_score,
    )


def score_all(hits: list[RawSearchHit], summary: VideoSummary) -> list[Finding]:
    """Score hits in order, keeping only accepted findings."""
    findings = []
    for hit in hits:
        finding = score(hit, summary)
        if finding is not None:
            findings.append(finding)
    return findings
