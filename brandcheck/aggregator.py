"""Finding aggregation: dedupe, rank and cap findings across queries."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .schemas import ComplianceIssue, Finding

logger = logging.getLogger(__name__)

MAX_FINDINGS = 10
RISK_ORDER = {"critical": 4, "high": 3, "medium": 2, "low": 1}


def aggregate(per_query_findings: Iterable[list[Finding]], limit: int = MAX_FINDINGS) -> list[Finding]:
    """Flatten per-query findings, drop repeated URLs, rank and cap.

    The first finding seen for a URL wins. Ranking is by risk level, then
    relevance score, both descending; ties keep their original order.
    """
    flat = [f for findings in per_query_findings for f in findings]

    seen: set[str] = set()
    unique: list[Finding] = []
    for finding in flat:
        if finding.url in seen:
            continue
        seen.add(finding.url)
        unique.append(finding)
    logger.info("Findings: %d before dedupe, %d after", len(flat), len(unique))

    unique.sort(key=lambda f: (RISK_ORDER[f.risk_level], f.relevance_score), reverse=True)
    return unique[:limit]


def to_compliance_issues(findings: list[Finding]) -> list[ComplianceIssue]:
    """Contextual risks apply to the whole video, so the timestamp is 0."""
    return [
        ComplianceIssue(
            timestamp=0,
            issue=f"Contextual Risk: {f.topic_name} - {f.description}",
            suggested_fix=f.recommendation,
            severity=f.risk_level,
            category="contextual-risk",
            source_url=f.url,
            published_date=f.published_date,
        )
        for f in findings
    ]
