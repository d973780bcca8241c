"""Tests for report rendering."""

from brandcheck.fallbacks import fallback_summary, no_risks_issue
from brandcheck.renderer import render_progress, render_report
from brandcheck.schemas import ComplianceIssue, ComplianceReport, ProgressUpdate


def _report() -> ComplianceReport:
    technical = [
        ComplianceIssue(timestamp=75, issue="Font 'Comic Sans' used", suggested_fix="Use 'Inter'",
                        severity="medium", category="text"),
        ComplianceIssue(timestamp=3.2, issue="Logo missing", suggested_fix="Add logo",
                        severity="high", category="branding"),
    ]
    contextual = [no_risks_issue()]
    return ComplianceReport(
        technical_issues=technical,
        contextual_risks=contextual,
        video_summary=fallback_summary(),
        total_issues=3,
        processing_time=4200,
    )


def test_headline_depth() -> None:
    text = render_report(_report(), depth=0)
    assert text == "[COMPLIANCE] 3 issue(s) (2 technical, 0 contextual) in 4.2s"


def test_card_lists_issues_by_timestamp() -> None:
    text = render_report(_report())
    assert text.index("[0:03]") < text.index("[1:15]")
    assert "CONTEXTUAL RISKS" in text
    assert "whole video" in text
    assert "VIDEO SUMMARY" not in text


def test_detailed_depth_includes_summary() -> None:
    text = render_report(_report(), depth=2)
    assert "VIDEO SUMMARY" in text
    assert "General content" in text


def test_progress_line() -> None:
    update = ProgressUpdate(step="compiling", progress=95, message="Compiling...")
    assert render_progress(update) == "[ 95%] compiling: Compiling..."
