"""Exceptions raised across the compliance pipeline."""

from __future__ import annotations


class BrandcheckError(Exception):
    """Base class for brandcheck errors."""


class LLMNotConfigured(BrandcheckError):
    """No model provider key is available."""


class SearchNotConfigured(BrandcheckError):
    """No search provider key is available."""


class ComplianceCheckError(BrandcheckError):
    """The technical compliance check could not produce an issue list."""
