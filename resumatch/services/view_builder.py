"""Builds the display model for an analysis state."""

import math

from resumatch.schemas.match import MatchResult, classify
from resumatch.schemas.state import (
    AnalysisState,
    FailedState,
    InFlightState,
    SucceededState,
)
from resumatch.schemas.view import (
    AnalysisView,
    MissingKeywordsPanel,
    ResultPanel,
    ScoreCard,
)

RESULT_TITLE = "ATS Match Analysis"
SUBMIT_LABEL = "Analyze Match"
SUBMIT_LABEL_LOADING = "Analyzing..."
NOT_AVAILABLE = "N/A"

# (wire name, label, caption)
OVERALL_CARD = ("final_match_percentage", "Overall Match Score", None)
DIMENSION_CARDS = (
    ("semantic_score", "Semantic Score", "Context understanding"),
    ("skill_overlap_score", "Skill Overlap", "Technical match"),
    ("impact_score", "Impact Score", "Experience relevance"),
)


def format_percentage(value: float | None) -> str:
    """Render a score as ``82%`` / ``82.5%``; absent or NaN scores become ``N/A``."""
    if value is None or math.isnan(value):
        return NOT_AVAILABLE
    if float(value).is_integer():
        return f"{int(value)}%"
    return f"{value:g}%"


def _card(result: MatchResult, key: str, label: str, caption: str | None) -> ScoreCard:
    value = result.scores()[key]
    return ScoreCard(
        key=key,
        label=label,
        caption=caption,
        value=value,
        display_value=format_percentage(value),
        category=None if value is None else classify(value),
    )


def build_result_panel(result: MatchResult) -> ResultPanel:
    keywords = list(result.missing_keywords)
    return ResultPanel(
        title=RESULT_TITLE,
        overall=_card(result, *OVERALL_CARD),
        cards=[_card(result, *entry) for entry in DIMENSION_CARDS],
        missing_keywords=MissingKeywordsPanel(
            visible=bool(keywords),
            count=len(keywords),
            keywords=keywords,
        ),
    )


def build_view(state: AnalysisState) -> AnalysisView:
    """Project a controller state onto the page model.

    Args:
        state: Current controller state.

    Returns:
        AnalysisView with button, error and result sections filled in.
    """
    loading = isinstance(state, InFlightState)
    view = AnalysisView(
        status=state.status,
        is_loading=loading,
        submit_label=SUBMIT_LABEL_LOADING if loading else SUBMIT_LABEL,
        submit_disabled=loading,
    )

    if isinstance(state, FailedState):
        view.error_message = state.error_message
    elif isinstance(state, SucceededState):
        view.result = build_result_panel(state.result)

    return view
