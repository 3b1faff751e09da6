"""Tagged lifecycle state of a single analysis request.

Exactly one of these values describes a controller at any time, so a loading
flag and a stale result can never be observed together.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from resumatch.schemas.match import MatchResult

FailureKind = Literal["validation", "service", "transport", "cancelled"]


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)


class IdleState(_State):
    """Nothing submitted yet."""

    status: Literal["idle"] = "idle"


class InFlightState(_State):
    """A request to the match service is pending."""

    status: Literal["in_flight"] = "in_flight"


class SucceededState(_State):
    """The last request produced a result."""

    status: Literal["succeeded"] = "succeeded"
    result: MatchResult


class FailedState(_State):
    """The last submit ended with a single user-visible error message."""

    status: Literal["failed"] = "failed"
    error_message: str
    kind: FailureKind
    error_code: str | None = None


AnalysisState = Annotated[
    Union[IdleState, InFlightState, SucceededState, FailedState],
    Field(discriminator="status"),
]
