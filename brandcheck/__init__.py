"""
brandcheck: brand compliance and contextual risk checks for video.

Usage:
    import asyncio
    from brandcheck import ComplianceRequest, check_compliance, check_compliance_stream

    request = ComplianceRequest(
        video="spot.mp4",
        guidelines="Logo top-right at 85% opacity. Primary color #1E40AF.",
        brand_name="Acme",
    )

    # Final report only
    report = asyncio.run(check_compliance(request))

    # Live progress, then the report as the last item
    async def watch():
        async for item in check_compliance_stream(request):
            print(item)
"""

from .aggregator import aggregate
from .pipeline import check_compliance, check_compliance_stream, check_compliance_sync, run_pipeline
from .queries import generate_queries
from .schemas import (
    ComplianceIssue,
    ComplianceReport,
    ComplianceRequest,
    Finding,
    ProgressUpdate,
    RawSearchHit,
    VideoSummary,
)
from .scoring import score
from .summarizer import summarize

__all__ = [
    "ComplianceIssue",
    "ComplianceReport",
    "ComplianceRequest",
    "Finding",
    "ProgressUpdate",
    "RawSearchHit",
    "VideoSummary",
    "aggregate",
    "check_compliance",
    "check_compliance_stream",
    "check_compliance_sync",
    "generate_queries",
    "run_pipeline",
    "score",
    "summarize",
]
