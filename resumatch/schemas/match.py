"""Pydantic schemas for analysis inputs and match service results."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resumatch.core.config import ScoreRangePolicy

SCORE_MIN = 0.0
SCORE_MAX = 100.0

HIGH_THRESHOLD = 75.0
MEDIUM_THRESHOLD = 50.0


class Category(str, Enum):
    """Coarse display bucket for a percentage score."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def classify(score: float) -> Category:
    """Map a percentage score to High (>= 75), Medium (>= 50) or Low.

    Used for presentation hints only; the score itself is never validated here.
    """
    if score >= HIGH_THRESHOLD:
        return Category.HIGH
    if score >= MEDIUM_THRESHOLD:
        return Category.MEDIUM
    return Category.LOW


def _clamp(value: float) -> float:
    if math.isnan(value):
        return SCORE_MIN
    return min(max(value, SCORE_MIN), SCORE_MAX)


class AnalysisInput(BaseModel):
    """One resume/job description pair as typed by the user.

    Text is kept exactly as entered; trimming only decides whether a field
    counts as empty.
    """

    resume: str = ""
    job_description: str = ""

    def missing_fields(self) -> list[str]:
        """Names of the fields that are empty after trimming whitespace."""
        return [
            name
            for name, value in (
                ("resume", self.resume),
                ("job_description", self.job_description),
            )
            if not value.strip()
        ]

    def to_payload(self) -> dict[str, str]:
        """Request body for the match service."""
        return {"resume": self.resume, "job_description": self.job_description}


class MatchResult(BaseModel):
    """Multi-dimensional compatibility result returned by the match service.

    Field names match the wire format. Scores absent from the payload stay
    ``None``; unknown fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    final_match_percentage: float | None = Field(
        None,
        description="Overall match percentage, nominally 0-100.",
    )
    semantic_score: float | None = Field(
        None,
        description="Contextual similarity between resume and job description.",
    )
    skill_overlap_score: float | None = Field(
        None,
        description="Share of required skills found in the resume.",
    )
    impact_score: float | None = Field(
        None,
        description="Relevance of the candidate's experience and achievements.",
    )
    missing_keywords: list[str] = Field(
        default_factory=list,
        description="Job keywords not found in the resume, in service order.",
    )

    @field_validator("missing_keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: Any) -> Any:
        # Scalar items are kept as text; nested objects still fail validation
        if value is None:
            return []
        if isinstance(value, list):
            return [
                str(item) if isinstance(item, (int, float)) and not isinstance(item, bool) else item
                for item in value
            ]
        return value

    def scores(self) -> dict[str, float | None]:
        """The four score dimensions keyed by wire name."""
        return {
            "final_match_percentage": self.final_match_percentage,
            "semantic_score": self.semantic_score,
            "skill_overlap_score": self.skill_overlap_score,
            "impact_score": self.impact_score,
        }

    def out_of_range_scores(self) -> list[str]:
        return [
            name
            for name, value in self.scores().items()
            if value is not None and not SCORE_MIN <= value <= SCORE_MAX
        ]

    def categories(self) -> dict[str, Category | None]:
        """Per-dimension category; ``None`` where the score is absent."""
        return {
            name: None if value is None else classify(value)
            for name, value in self.scores().items()
        }

    def with_score_policy(self, policy: ScoreRangePolicy) -> MatchResult:
        """Apply the configured out-of-range policy.

        Args:
            policy: ``trust`` keeps values, ``clamp`` clamps into [0, 100] (NaN becomes 0),
                ``reject`` raises on any out-of-range score.

        Returns:
            The result, possibly with clamped scores.

        Raises:
            ValueError: If policy is ``reject`` and a score is out of range.
        """
        offending = self.out_of_range_scores()
        if not offending or policy == "trust":
            return self
        if policy == "reject":
            raise ValueError(f"Scores out of range [0, 100]: {', '.join(offending)}")
        clamped = {name: _clamp(self.scores()[name]) for name in offending}
        return self.model_copy(update=clamped)
