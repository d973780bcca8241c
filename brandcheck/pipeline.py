"""Compliance pipeline: the orchestrator behind every entry point.

Flow:
  video-analysis        20 → 40   summarize (falls back to the canned summary)
  technical-compliance  60        check against guidelines (quota → warning, else → empty)
  sensitive-topics      70 → 90   queries → search → score → aggregate (optional)
  compiling             95
  complete              100
  error                 0         anything unexpected; emitted, then re-raised

One state machine, ``run_pipeline``, drives both entry points: it pushes
ProgressUpdate values into a callback. ``check_compliance_stream`` turns
that callback into an async iterator; ``check_compliance`` ignores it and
returns only the report.

The technical check does not depend on the summary, so it starts together
with the summary and overlaps the contextual search. Progress events are
still emitted in the fixed order above.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Optional, Union

from . import checker
from .aggregator import aggregate, to_compliance_issues
from .fallbacks import is_no_risks_placeholder, no_risks_issue, quota_warning_issue
from .media import prepare_video
from .queries import generate_queries
from .schemas import (
    ComplianceIssue,
    ComplianceReport,
    ComplianceRequest,
    Finding,
    ProgressUpdate,
    VideoSummary,
)
from .scoring import score_all
from .search import RiskSearchClient, risk_window_start
from .stages import StageKind, StageResult
from .summarizer import summarize_outcome

logger = logging.getLogger(__name__)

Emit = Callable[[ProgressUpdate], Union[Awaitable[None], None]]
SummarizeFn = Callable[[str, Optional[str]], Awaitable[StageResult[VideoSummary]]]
CheckFn = Callable[[str, str, Optional[str]], Awaitable[list[ComplianceIssue]]]


async def _noop(update: ProgressUpdate) -> None:
    return None


def _dump(items: list[Any]) -> list[dict[str, Any]]:
    return [item.model_dump(by_alias=True) for item in items]


# ── Stages ────────────────────────────────────────────────────────


async def _technical_stage(request: ComplianceRequest, check_fn: CheckFn) -> StageResult[list[ComplianceIssue]]:
    try:
        issues = await check_fn(request.video, request.guidelines, request.content_type)
        return StageResult.success(list(issues))
    except Exception as exc:
        if "quota" in str(exc).lower():
            logger.warning("API quota exceeded, using fallback compliance check: %s", exc)
            return StageResult.degraded([quota_warning_issue()], StageKind.QUOTA, exc)
        logger.warning("Technical compliance check failed: %s", exc)
        return StageResult.degraded([], StageKind.FAILED, exc)


async def _search_and_rank(
    queries: list[str],
    summary: VideoSummary,
    search_client: RiskSearchClient,
    window_start: str,
) -> tuple[list[Finding], int]:
    batches = await search_client.search(queries, window_start)
    per_query = [score_all(batch.hits, summary) for batch in batches]
    total_hits = sum(len(batch.hits) for batch in batches)
    findings = aggregate(per_query)
    logger.info(
        "Contextual search: %d queries, %d hits, %d findings kept",
        len(queries), total_hits, len(findings),
    )
    return findings, total_hits


async def find_contextual_risks(
    brand_name: str,
    summary: VideoSummary,
    search_client: RiskSearchClient,
    window_start: str,
) -> list[Finding]:
    """Generate queries, search, score and aggregate into ranked findings."""
    queries = generate_queries(brand_name, summary)
    findings, _ = await _search_and_rank(queries, summary, search_client, window_start)
    return findings


async def _contextual_stage(
    request: ComplianceRequest,
    summary: VideoSummary,
    search_client: RiskSearchClient | None,
    window_start: str,
) -> tuple[StageResult[list[ComplianceIssue]], list[str], int]:
    """Returns the stage result plus the queries run and the raw hit count."""
    queries = generate_queries(request.brand_name, summary)
    total_hits = 0
    try:
        client = search_client or RiskSearchClient()
        findings, total_hits = await _search_and_rank(queries, summary, client, window_start)
        result = StageResult.success(to_compliance_issues(findings))
    except Exception as exc:
        logger.warning("Sensitive topics check failed: %s", exc)
        result = StageResult.degraded([], StageKind.FAILED, exc)

    if not result.value:
        result = StageResult(value=[no_risks_issue()], kind=result.kind, error=result.error)
    return result, queries, total_hits


# ── State machine ─────────────────────────────────────────────────


async def run_pipeline(
    request: ComplianceRequest,
    emit: Emit | None = None,
    *,
    summarizer: SummarizeFn = summarize_outcome,
    compliance_check: CheckFn | None = None,
    search_client: RiskSearchClient | None = None,
    resolve_local: bool = True,
) -> ComplianceReport:
    """Run the full compliance analysis, pushing progress into ``emit``.

    A local video path is read once, off the event loop, and the resulting
    data URI is shared by every stage. Pass ``resolve_local=False`` when the
    request comes from an untrusted caller: local paths then fail the run.
    """
    start = time.perf_counter()
    window_start = risk_window_start()
    check_fn = compliance_check or checker.check
    emit = emit or _noop

    async def push(step: str, progress: int, message: str, **partial: Any) -> None:
        update = ProgressUpdate(
            step=step, progress=progress, message=message,
            partial_results=partial or None,
        )
        logger.info("[%s %d%%] %s", step, progress, message)
        result = emit(update)
        if inspect.isawaitable(result):
            await result

    pending: list[asyncio.Task] = []
    try:
        await push("video-analysis", 20, "Analyzing video content and extracting key themes...")
        video = await prepare_video(request.video, request.content_type, resolve_local)
        if video != request.video:
            request = request.model_copy(update={"video": video})

        technical_task = asyncio.create_task(_technical_stage(request, check_fn))
        pending.append(technical_task)

        summary_result = await summarizer(request.video, request.content_type)
        summary = summary_result.value
        if summary_result.ok:
            message = "Video analysis complete. Checking brand guidelines..."
        else:
            message = "Video analysis failed, using fallback summary. Checking brand guidelines..."
        await push("video-analysis", 40, message, videoSummary=summary.model_dump(by_alias=True))

        contextual_task = None
        if request.enable_sensitive_topics_check:
            contextual_task = asyncio.create_task(
                _contextual_stage(request, summary, search_client, window_start)
            )
            pending.append(contextual_task)

        technical_result = await technical_task
        technical_issues = technical_result.value
        if technical_result.kind is StageKind.QUOTA:
            message = "API quota exceeded - using fallback compliance check."
        else:
            message = f"Found {len(technical_issues)} technical compliance issues."
        await push("technical-compliance", 60, message, technicalIssues=_dump(technical_issues))

        contextual_risks: list[ComplianceIssue] = []
        if contextual_task is not None:
            await push("sensitive-topics", 70, "Searching for recent sensitive topics and cultural risks...")
            contextual_result, search_queries, total_results = await contextual_task
            contextual_risks = contextual_result.value
            if contextual_result.kind is StageKind.FAILED:
                message = "Sensitive topics check completed with limited results."
            elif is_no_risks_placeholder(contextual_risks):
                message = "No high or critical risk sensitive topics found - content appears compliant."
            else:
                message = f"Found {len(contextual_risks)} high or critical risk factors."
            await push(
                "sensitive-topics", 90, message,
                contextualRisks=_dump(contextual_risks),
                searchQueries=search_queries,
                totalResults=total_results,
            )

        await push("compiling", 95, "Compiling comprehensive compliance report...")
        total_issues = len(technical_issues) + len(contextual_risks)
        report = ComplianceReport(
            technical_issues=technical_issues,
            contextual_risks=contextual_risks,
            video_summary=summary,
            total_issues=total_issues,
            processing_time=int((time.perf_counter() - start) * 1000),
        )
        await push("complete", 100, f"Analysis complete! Found {total_issues} total issues.")
        return report

    except Exception as exc:
        logger.error("Compliance pipeline failed: %s", exc)
        await push("error", 0, f"Error during analysis: {exc}")
        raise
    finally:
        for task in pending:
            if not task.done():
                task.cancel()


# ── Entry points ──────────────────────────────────────────────────


async def check_compliance(request: ComplianceRequest, **deps: Any) -> ComplianceReport:
    """Run the pipeline to completion and return only the final report."""
    return await run_pipeline(request, None, **deps)


async def check_compliance_stream(
    request: ComplianceRequest, **deps: Any
) -> AsyncIterator[Union[ProgressUpdate, ComplianceReport]]:
    """Yield ProgressUpdate values as they happen, then the ComplianceReport.

    If the pipeline fails, the final ``error`` update is yielded before the
    exception is re-raised to the consumer.
    """
    queue: asyncio.Queue = asyncio.Queue()
    done = object()

    task = asyncio.create_task(run_pipeline(request, queue.put, **deps))
    task.add_done_callback(lambda _: queue.put_nowait(done))
    try:
        while True:
            item = await queue.get()
            if item is done:
                break
            yield item
        yield task.result()
    finally:
        if not task.done():
            task.cancel()


def check_compliance_sync(
    request: ComplianceRequest,
    on_progress: Callable[[ProgressUpdate], None] | None = None,
    **deps: Any,
) -> ComplianceReport:
    """Blocking wrapper for the CLI and MCP server."""
    return asyncio.run(run_pipeline(request, on_progress, **deps))
