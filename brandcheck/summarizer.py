"""Video summarizer: structured topical summary of a video via the model.

The summary feeds the contextual risk search, so it must always exist:
any failure (no key, API error, prose instead of JSON, wrong shape)
degrades to the canned fallback summary instead of raising.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from . import llm
from .errors import LLMNotConfigured
from .fallbacks import fallback_summary
from .media import detect_content_type, prepare_video, video_part
from .schemas import VideoSummary
from .stages import StageKind, StageResult

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are an expert video content analyst specializing in identifying potentially "
    "sensitive or controversial elements in media content. Provide detailed, structured "
    "analysis in JSON format."
)

_ANALYSIS_PROMPT = """\
Analyze the provided video ({content_type}) and extract key information that would be useful
for identifying potential sensitive topics or cultural risks.

Cover:
1. mainTopics: primary subjects, themes, or topics discussed or shown
2. keyMessages: main messages, calls-to-action, or themes conveyed
3. visualElements: important colors, symbols, imagery, text overlays
4. targetAudience: intended audience or demographic
5. contentTheme: category (educational, promotional, entertainment, news, ...)
6. productsMentioned: products, services, or brand names mentioned or shown
7. tone: overall tone (professional, casual, urgent, humorous, serious, ...)
8. culturalElements: cultural references, holidays, traditions, or cultural themes

Focus on elements that could be sensitive or controversial in current cultural contexts.
Be thorough but concise.

Respond with ONLY a JSON object of this exact structure, no text before or after:
{{
  "mainTopics": ["topic1", "topic2", "topic3"],
  "keyMessages": ["message1", "message2"],
  "visualElements": ["element1", "element2"],
  "targetAudience": "description of target audience",
  "contentTheme": "theme category",
  "productsMentioned": ["product1", "product2"],
  "tone": "overall tone description",
  "culturalElements": ["cultural reference1", "cultural reference2"]
}}"""


async def _llm_summary(video: str, content_type: str) -> VideoSummary:
    video = await prepare_video(video, content_type)
    content = [
        {"type": "text", "text": _ANALYSIS_PROMPT.format(content_type=content_type)},
        video_part(video),
    ]
    raw = await llm.complete(_SYSTEM_PROMPT, content, temperature=0.3)
    if not raw:
        raise ValueError("Empty response from LLM")

    parsed = llm.extract_json(raw, openers="{")
    summary = VideoSummary.model_validate(parsed)
    logger.info(
        "Video summary generated (%d topics, theme=%r, tone=%r)",
        len(summary.main_topics), summary.content_theme, summary.tone,
    )
    return summary


async def summarize_outcome(video: str, content_type: str | None = None) -> StageResult[VideoSummary]:
    """Summarize, reporting whether the result is real or the fallback."""
    try:
        mime = detect_content_type(video, content_type)
        return StageResult.success(await _llm_summary(video, mime))
    except LLMNotConfigured as exc:
        logger.warning("%s Using fallback summary.", exc)
        return StageResult.degraded(fallback_summary(), StageKind.FALLBACK, exc)
    except (ValueError, ValidationError) as exc:
        logger.warning("Video summary was not usable JSON: %s", exc)
        return StageResult.degraded(fallback_summary(), StageKind.FALLBACK, exc)
    except Exception as exc:
        logger.warning("Video summary failed: %s", exc)
        return StageResult.degraded(fallback_summary(), StageKind.FALLBACK, exc)


async def summarize(video: str, content_type: str | None = None) -> VideoSummary:
    """Generate a structured summary of the video. Never raises.

    Returns the model's summary, or the canned fallback summary when the
    analysis could not be completed.
    """
    outcome = await summarize_outcome(video, content_type)
    return outcome.value
