"""Stage outcomes: what each pipeline stage hands back to the orchestrator.

A stage never leaves its failure policy implicit: it returns a
``StageResult`` whose ``kind`` tells the orchestrator whether the value is
real, a canned substitute, or empty because the stage failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StageKind(str, Enum):
    OK = "ok"
    FALLBACK = "fallback"  # canned value substituted
    QUOTA = "quota"  # provider quota exhausted, warning substituted
    FAILED = "failed"  # stage failed, empty value substituted


@dataclass(frozen=True)
class StageResult(Generic[T]):
    value: T
    kind: StageKind = StageKind.OK
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.kind is StageKind.OK

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def degraded(cls, value: T, kind: StageKind, error: BaseException | None = None) -> "StageResult[T]":
        return cls(value=value, kind=kind, error=error)
