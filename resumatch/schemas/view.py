"""Render-ready projection of an analysis state."""

from typing import Literal

from pydantic import BaseModel, Field

from resumatch.schemas.match import Category


class ScoreCard(BaseModel):
    """A single score dimension as displayed."""

    key: str = Field(..., description="Wire name of the score, e.g. 'semantic_score'.")
    label: str
    caption: str | None = None
    value: float | None = None
    display_value: str = Field(..., description="Formatted percentage, or 'N/A'.")
    category: Category | None = None


class MissingKeywordsPanel(BaseModel):
    visible: bool
    count: int
    keywords: list[str] = Field(default_factory=list)


class ResultPanel(BaseModel):
    title: str
    overall: ScoreCard
    cards: list[ScoreCard]
    missing_keywords: MissingKeywordsPanel


class AnalysisView(BaseModel):
    """Everything a renderer needs for the current state, and nothing else.

    ``error_message`` and ``result`` are never both set.
    """

    status: Literal["idle", "in_flight", "succeeded", "failed"]
    is_loading: bool
    submit_label: str
    submit_disabled: bool
    error_message: str | None = None
    result: ResultPanel | None = None
