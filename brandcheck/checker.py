"""Technical compliance checker: video + brand guidelines → issues.

Unlike the summarizer this stage does not degrade on its own: any failure
is raised as ComplianceCheckError and the orchestrator decides what to
substitute. Provider rate-limit errors keep "quota exceeded" in the
message so they can be told apart.
"""

from __future__ import annotations

import logging
from typing import Any

import openai
from pydantic import ValidationError

from . import llm
from .errors import ComplianceCheckError
from .media import detect_content_type, prepare_video, video_part
from .schemas import TECHNICAL_CATEGORIES, ComplianceIssue

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are an AI brand compliance checker. Analyze the video thoroughly and identify "
    "specific, unique compliance issues at different timestamps. Each issue should be "
    "distinct and address a different aspect of brand compliance."
)

_CHECK_PROMPT = """\
Brand Guidelines:
{guidelines}

Video content type: {content_type}

Instructions:
1. Analyze the video frame by frame, looking for specific brand guideline violations
2. Create UNIQUE issues - avoid repeating the same type of problem
3. Focus on different aspects: visual elements, text, colors, logos, typography, spacing, audio, etc.
4. Provide specific timestamps where issues occur (not just 5-second intervals)
5. Give detailed, actionable fixes with specific parameters (colors, sizes, positions, etc.)
6. Categorize each issue appropriately
7. Assign realistic severity levels

Output ONLY a JSON array with this exact schema:
[{{
  "timestamp": number,
  "issue": "Specific description of what's wrong and which guideline it violates",
  "suggestedFix": "Detailed fix with specific parameters (colors, sizes, positions, timing, etc.)",
  "severity": "low|medium|high|critical",
  "category": "visual|audio|text|branding|technical"
}}]

Examples of good issues:
- "Brand logo is missing from the top-right corner at 0.0s"
- "Text color #FF0000 violates brand color palette (should be #1E40AF) at 3.2s"
- "Font 'Comic Sans' used instead of brand font 'Inter' at 7.5s"
- "Audio volume exceeds brand standard of -12dB at 15.8s"

Make each issue specific, actionable, and unique. Return [] if there are no issues."""


def parse_issues(raw: str) -> list[ComplianceIssue]:
    """Validate a model reply as a list of technical compliance issues."""
    parsed: Any = llm.extract_json(raw, openers="[{")
    if isinstance(parsed, dict):
        parsed = parsed.get("issues", [])
    if not isinstance(parsed, list):
        raise ValueError(f"Expected a JSON array of issues, got {type(parsed).__name__}")

    issues = [ComplianceIssue.model_validate(item) for item in parsed]
    for issue in issues:
        if issue.category not in TECHNICAL_CATEGORIES:
            raise ValueError(f"Category {issue.category!r} is not a technical category")
    return issues


async def check(video: str, guidelines: str, content_type: str | None = None) -> list[ComplianceIssue]:
    """Check a video against brand guidelines. Raises ComplianceCheckError on failure."""
    mime = detect_content_type(video, content_type)
    video = await prepare_video(video, mime)
    content = [
        {"type": "text", "text": _CHECK_PROMPT.format(guidelines=guidelines, content_type=mime)},
        video_part(video),
    ]

    try:
        raw = await llm.complete(_SYSTEM_PROMPT, content, temperature=0.2)
        issues = parse_issues(raw)
    except openai.RateLimitError as exc:
        raise ComplianceCheckError(f"API quota exceeded: {exc}") from exc
    except (ValueError, ValidationError) as exc:
        raise ComplianceCheckError(f"Compliance check returned unusable output: {exc}") from exc
    except openai.APIError as exc:
        raise ComplianceCheckError(f"Compliance check failed: {exc}") from exc

    logger.info("Compliance check found %d technical issues", len(issues))
    return issues
