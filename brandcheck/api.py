"""brandcheck HTTP API: FastAPI endpoints for the compliance pipeline.

Usage:
    uvicorn brandcheck.api:app --port 8080

Endpoints:
    POST /check          full report as JSON
    POST /check/stream   NDJSON: {"type": "progress", ...} lines, then
                         {"type": "report", ...} or {"type": "error", ...}
    POST /queries        contextual search queries for a brand + summary

``video`` must be a data URI or an http(s) URL. Local paths are rejected
with 422; use the CLI to check a file on disk.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from .media import is_remote
from .pipeline import check_compliance, check_compliance_stream
from .queries import generate_queries
from .schemas import ComplianceReport, ComplianceRequest, ProgressUpdate, VideoSummary

logger = logging.getLogger(__name__)

app = FastAPI(title="brandcheck", version="0.1.0")


class QueriesRequest(BaseModel):
    brand_name: str
    video_summary: VideoSummary


class QueriesResponse(BaseModel):
    queries: list[str]


@app.get("/health")
def health():
    return {"status": "ok"}


def _require_remote_video(req: ComplianceRequest) -> None:
    # The server must never read its own filesystem on behalf of a caller.
    if not is_remote(req.video):
        raise HTTPException(status_code=422, detail="video must be a data URI or an http(s) URL")


@app.post("/check", response_model=ComplianceReport)
async def check(req: ComplianceRequest):
    _require_remote_video(req)
    try:
        return await check_compliance(req, resolve_local=False)
    except Exception as exc:
        logger.error("Compliance check failed: %s", exc)
        raise HTTPException(status_code=500, detail=f"Compliance check failed: {exc}")


async def _ndjson(req: ComplianceRequest) -> AsyncIterator[str]:
    try:
        async for item in check_compliance_stream(req, resolve_local=False):
            if isinstance(item, ProgressUpdate):
                line = {"type": "progress", **item.model_dump(by_alias=True)}
            else:
                line = {"type": "report", **item.model_dump(by_alias=True)}
            yield json.dumps(line, ensure_ascii=False) + "\n"
    except Exception as exc:
        logger.error("Streaming compliance check failed: %s", exc)
        yield json.dumps({"type": "error", "message": str(exc)}) + "\n"


@app.post("/check/stream")
async def check_stream(req: ComplianceRequest):
    _require_remote_video(req)
    return StreamingResponse(_ndjson(req), media_type="application/x-ndjson")


@app.post("/queries", response_model=QueriesResponse)
def queries(req: QueriesRequest):
    return QueriesResponse(queries=generate_queries(req.brand_name, req.video_summary))
