"""Report renderer: converts a ComplianceReport to readable plain text.

Supports progressive depth:
  depth=0  headline     "3 issues (1 technical, 2 contextual) in 4.2s"
  depth=1  card         + every issue, grouped technical / contextual
  depth=2  detailed     + video summary and issue sources
"""

from __future__ import annotations

from .fallbacks import is_no_risks_placeholder
from .schemas import ComplianceIssue, ComplianceReport, ProgressUpdate

_SEVERITY_MARK = {"critical": "!!!", "high": "!!", "medium": "!", "low": "·"}


def _rule(label: str, width: int = 50, char: str = "─") -> str:
    head = f"{char * 3} {label} "
    return head + char * max(1, width - len(head))


def _format_timestamp(sec: float) -> str:
    """Convert seconds to a timestamp like '1:25' or '1:02:15'."""
    total = int(sec)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def _truncate_line(text: str, max_len: int = 160) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len].rsplit(" ", 1)[0].rstrip(".,;:!?") + "..."


def _format_issue(issue: ComplianceIssue, depth: int) -> list[str]:
    mark = _SEVERITY_MARK.get(issue.severity, "")
    where = "whole video" if issue.category == "contextual-risk" else _format_timestamp(issue.timestamp)
    lines = [
        f"▸ [{where}] {mark} {issue.severity.upper()} {issue.category}: {_truncate_line(issue.issue)}",
        f"    fix: {_truncate_line(issue.suggested_fix)}",
    ]
    if depth >= 2 and issue.source_url:
        source = f"    source: {issue.source_url}"
        if issue.published_date:
            source += f" ({issue.published_date[:10]})"
        lines.append(source)
    return lines


def headline(report: ComplianceReport) -> str:
    contextual = 0 if is_no_risks_placeholder(report.contextual_risks) else len(report.contextual_risks)
    return (
        f"{report.total_issues} issue(s) "
        f"({len(report.technical_issues)} technical, {contextual} contextual) "
        f"in {report.processing_time / 1000:.1f}s"
    )


def render_report(report: ComplianceReport, depth: int = 1) -> str:
    """Render a report at the requested depth."""
    if depth <= 0:
        return f"[COMPLIANCE] {headline(report)}"

    lines: list[str] = []
    lines.append("═══ COMPLIANCE REPORT " + "═" * 28)
    lines.append(headline(report))

    if depth >= 2:
        s = report.video_summary
        lines.append("")
        lines.append(_rule("VIDEO SUMMARY"))
        lines.append(f"Theme: {s.content_theme} | Tone: {s.tone} | Audience: {s.target_audience}")
        lines.append("Topics: " + " · ".join(s.main_topics))
        if s.key_messages:
            lines.append("Messages: " + " · ".join(s.key_messages))
        if s.visual_elements:
            lines.append("Visuals: " + " · ".join(s.visual_elements))
        if s.products_mentioned:
            lines.append("Products: " + " · ".join(s.products_mentioned))
        if s.cultural_elements:
            lines.append("Cultural: " + " · ".join(s.cultural_elements))

    lines.append("")
    lines.append(_rule("TECHNICAL"))
    if report.technical_issues:
        for issue in sorted(report.technical_issues, key=lambda i: i.timestamp):
            lines.extend(_format_issue(issue, depth))
    else:
        lines.append("No technical issues found.")

    if report.contextual_risks:
        lines.append("")
        lines.append(_rule("CONTEXTUAL RISKS"))
        for issue in report.contextual_risks:
            lines.extend(_format_issue(issue, depth))

    return "\n".join(lines)


def render_progress(update: ProgressUpdate) -> str:
    return f"[{update.progress:3d}%] {update.step}: {update.message}"
