"""brandcheck schemas: the shapes passed between pipeline stages.

Python attributes are snake_case; JSON uses the camelCase names the model
prompts and the HTTP surface speak (``mainTopics``, ``suggestedFix``...).
Both spellings are accepted on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Severity = Literal["low", "medium", "high", "critical"]
Category = Literal["visual", "audio", "text", "branding", "technical", "contextual-risk"]
TECHNICAL_CATEGORIES = frozenset({"visual", "audio", "text", "branding", "technical"})

Step = Literal[
    "video-analysis",
    "technical-compliance",
    "sensitive-topics",
    "compiling",
    "complete",
    "error",
]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoSummary(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    main_topics: list[str] = Field(min_length=1)
    key_messages: list[str] = Field(default_factory=list)
    visual_elements: list[str] = Field(default_factory=list)
    target_audience: str = ""
    content_theme: str = ""
    tone: str = ""
    products_mentioned: list[str] = Field(default_factory=list)
    cultural_elements: list[str] = Field(default_factory=list)

    @field_validator("products_mentioned", "cultural_elements", mode="before")
    @classmethod
    def _absent_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RawSearchHit(_Model):
    title: str = ""
    text: str = ""
    url: str = ""
    published_date: str = Field(default_factory=utc_now_iso)

    @field_validator("title", "text", "url", mode="before")
    @classmethod
    def _none_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("published_date", mode="before")
    @classmethod
    def _default_now(cls, value: Any) -> Any:
        return value or utc_now_iso()


class SearchBatchResult(_Model):
    query: str
    hits: list[RawSearchHit] = Field(default_factory=list)


class Finding(_Model):
    topic_name: str = Field(max_length=100)
    description: str
    url: str
    published_date: str
    risk_level: Severity
    recommendation: str
    relevance_score: float = Field(ge=0)


class ComplianceIssue(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    timestamp: float = Field(ge=0)  # seconds; 0 for whole-video issues
    issue: str
    suggested_fix: str
    severity: Severity
    category: Category
    source_url: Optional[str] = None
    published_date: Optional[str] = None


class ProgressUpdate(_Model):
    step: Step
    progress: int = Field(ge=0, le=100)
    message: str
    partial_results: Optional[dict[str, Any]] = None


class ComplianceReport(_Model):
    technical_issues: list[ComplianceIssue] = Field(default_factory=list)
    contextual_risks: list[ComplianceIssue] = Field(default_factory=list)
    video_summary: VideoSummary
    total_issues: int = 0
    processing_time: int = 0  # wall-clock milliseconds


class ComplianceRequest(_Model):
    video: str  # data URI, http(s) URL or local file path
    guidelines: str
    brand_name: str = ""
    enable_sensitive_topics_check: bool = True
    content_type: Optional[str] = None
