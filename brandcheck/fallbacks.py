"""Canned values substituted when a pipeline stage degrades.

Every call site builds these through the functions below so the shapes
never drift apart.
"""

from __future__ import annotations

from .schemas import ComplianceIssue, VideoSummary, utc_now_iso

QUOTA_ISSUE_TEXT = "API quota exceeded - basic compliance check unavailable"
NO_RISKS_ISSUE_TEXT = "No high or critical risk sensitive topics found"


def fallback_summary() -> VideoSummary:
    return VideoSummary(
        main_topics=["General content"],
        key_messages=["Standard messaging"],
        visual_elements=["Standard visuals"],
        target_audience="General audience",
        content_theme="General content",
        products_mentioned=[],
        tone="Neutral",
        cultural_elements=[],
    )


def quota_warning_issue() -> ComplianceIssue:
    return ComplianceIssue(
        timestamp=0,
        issue=QUOTA_ISSUE_TEXT,
        suggested_fix=(
            "Please try again later or check your API billing settings. "
            "Enhanced features may be limited."
        ),
        severity="medium",
        category="technical",
    )


def no_risks_issue() -> ComplianceIssue:
    return ComplianceIssue(
        timestamp=0,
        issue=NO_RISKS_ISSUE_TEXT,
        suggested_fix=(
            "Your content appears compliant with current cultural and trending issues. "
            "Only high and critical risk factors are flagged - lower risk items are "
            "considered acceptable. Continue monitoring for any emerging risks."
        ),
        severity="low",
        category="contextual-risk",
        source_url=None,
        published_date=utc_now_iso(),
    )


def is_no_risks_placeholder(issues: list[ComplianceIssue]) -> bool:
    return len(issues) == 1 and issues[0].issue == NO_RISKS_ISSUE_TEXT
